from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.schemas.user import LoginRequest, TokenResponse
from fiverivers.services.auth import auth_service

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Log in to the admin portal.

    ``loginId`` may be either the user's login name or email address.

    Returns:
        ``{"token": <JWT>}`` valid for two hours

    Raises:
        HTTPException 400: If loginId or password is missing
        HTTPException 401: If the credentials are wrong
        HTTPException 403: If the user is inactive
    """
    token = auth_service.login(db=db, credentials=credentials)
    return {"token": token}
