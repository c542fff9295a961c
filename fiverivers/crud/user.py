from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import select, or_
from fiverivers.models.user import User
from fiverivers.core.security import get_password_hash


class CRUDUser:
    """
    CRUD operations for User model.

    Users are not part of the admin-portal entity set, so this class does
    not inherit from CRUDBase.
    """

    def __init__(self):
        self.model = User

    def get_by_login(self, db: Session, login_id: str) -> Optional[User]:
        """
        Retrieve a user whose login ID or email equals ``login_id``.

        Args:
            db: Database session
            login_id: Login ID or email address

        Returns:
            User instance or None if not found
        """
        stmt = select(User).where(or_(User.login_id == login_id, User.email == login_id))
        result = db.execute(stmt)
        return result.scalars().first()

    def get(self, db: Session, user_id: int) -> Optional[User]:
        """
        Retrieve user by ID.
        """
        stmt = select(User).where(User.id == user_id)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def create(
        self,
        db: Session,
        *,
        login_id: str,
        password: str,
        email: Optional[str] = None,
        is_active: bool = True
    ) -> User:
        """
        Create a new user with hashed password.

        Args:
            db: Database session
            login_id: Login name
            password: Plain text password (will be hashed)
            email: Optional email, also accepted as login
            is_active: Whether user is active

        Returns:
            Created User instance

        Raises:
            ValueError: If the login ID or email is already taken
        """
        db_user = User(
            login_id=login_id,
            email=email,
            hashed_password=get_password_hash(password),
            is_active=is_active
        )
        db.add(db_user)

        try:
            db.commit()
            db.refresh(db_user)
        except IntegrityError as e:
            db.rollback()
            raise ValueError(f"User {login_id} already exists") from e

        return db_user


# Create singleton instance
user = CRUDUser()
