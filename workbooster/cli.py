import argparse
import getpass
import logging
import sys

from sqlalchemy import func

from workbooster.core.config import settings
from workbooster.db import SessionLocal
from workbooster.models.users import User
from workbooster.utils.password import hash_password

logger = logging.getLogger(__name__)


def seed_admin(email: str, password: str, full_name: str) -> User:
    """Create the admin user, or reset its password and role if it exists."""
    db = SessionLocal()
    try:
        user = db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()
        if user is None:
            user = User(full_name=full_name, email=email.strip(), password=hash_password(password),
                        role="Admin", status="Active")
            db.add(user)
            logger.info(f"Created admin user {email}")
        else:
            user.password = hash_password(password)
            user.role = "Admin"
            user.status = "Active"
            logger.info(f"Reset admin user {email}")
        db.commit()
        db.refresh(user)
        return user
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def main(argv=None):
    logging.basicConfig(level=settings.LOG_LEVEL)
    parser = argparse.ArgumentParser(prog="workbooster", description="WorkBooster admin commands")
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed-admin", help="Create or reset the admin user")
    seed.add_argument("--email", default=settings.ADMIN_EMAIL)
    seed.add_argument("--name", default=settings.ADMIN_NAME)
    seed.add_argument("--password", default=settings.ADMIN_PASSWORD,
                      help="Defaults to ADMIN_PASSWORD, prompts when neither is set")

    args = parser.parse_args(argv)

    if args.command == "seed-admin":
        password = args.password or getpass.getpass("Admin password: ")
        if not password:
            print("A password is required", file=sys.stderr)
            return 1
        user = seed_admin(args.email, password, args.name)
        print(f"[ok] admin user {user.email} (id {user.user_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
