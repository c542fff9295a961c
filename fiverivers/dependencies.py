from fastapi import Depends, HTTPException, status, Request
from jose import JWTError
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.models.user import User
from fiverivers.core.security import verify_token
from fiverivers.crud import user as user_crud


async def get_current_user(
    request: Request,
    db: Session = Depends(get_db)
) -> User:
    """
    Extract and validate the JWT from the Authorization Bearer header and
    return the authenticated User.

    Args:
        request: FastAPI Request to extract Authorization header
        db: Database session

    Returns:
        The User named by the token's ``userId`` claim

    Raises:
        HTTPException 401: If the token is missing, invalid, expired or names no user
        HTTPException 403: If the user has been deactivated
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        raise credentials_exception

    token = authorization.replace("Bearer ", "", 1)
    try:
        payload = verify_token(token)
    except JWTError:
        raise credentials_exception

    user_id = payload.get("userId")
    if user_id is None:
        raise credentials_exception

    user = user_crud.get(db, int(user_id))
    if user is None:
        raise credentials_exception

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return user
