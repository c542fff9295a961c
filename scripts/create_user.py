"""
python -m scripts.create_user <login_id> <password> [email]

Creates an admin-portal login. Passwords are stored as bcrypt hashes.
"""

import sys

sys.path.insert(0, ".")

from dotenv import load_dotenv
load_dotenv()

from fiverivers.database import SessionLocal
from fiverivers.crud import user as user_crud


def create_user(login_id: str, password: str, email: str = None):
    """Add a user to the database."""
    db = SessionLocal()

    try:
        user = user_crud.create(db, login_id=login_id, password=password, email=email)
        print(f"Created user {user.login_id} (id={user.id})")
    except ValueError as e:
        print(f"Error: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) not in (3, 4):
        print(__doc__)
        sys.exit(1)
    create_user(*sys.argv[1:])
