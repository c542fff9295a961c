from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from fiverivers.core.logging_config import logger
from fiverivers.core.security import create_access_token, verify_password
from fiverivers.crud import user as user_crud
from fiverivers.schemas.user import LoginRequest


class AuthService:
    """
    Service layer for admin-portal login.
    """

    def login(self, db: Session, credentials: LoginRequest) -> str:
        """
        Authenticate by login ID or email and issue an access token.

        Args:
            db: Database session
            credentials: Login ID (or email) and password

        Returns:
            Signed JWT carrying ``userId`` and ``email`` claims

        Raises:
            HTTPException 400: If either field is missing
            HTTPException 401: If the credentials do not match a user
            HTTPException 403: If the user is deactivated
        """
        if not credentials.loginId or not credentials.password:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Login ID and password are required"
            )

        user = user_crud.get_by_login(db, credentials.loginId)
        if not user or not verify_password(credentials.password, user.hashed_password):
            logger.warning(f"Failed login attempt for {credentials.loginId}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials"
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="User account is inactive"
            )

        return create_access_token(data={"userId": user.id, "email": user.email})


# Create a singleton instance
auth_service = AuthService()
