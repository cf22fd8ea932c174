"""
Create a user (e.g. the first admin). Run from project root:
  python -m salon_api.scripts.create_user EMAIL PASSWORD FIRST_NAME LAST_NAME [role]
Example:
  python -m salon_api.scripts.create_user admin@example.com 'S3cure-pass' Salon Admin admin
"""
import argparse
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

from salon_api.core.config import get_settings
from salon_api.core.database import build_engine, build_session_factory
from salon_api.core.roles import UserRole
from salon_api.models.user import User
from salon_api.schemas.auth import RegisterRequest


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Create a salon account from the command line.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("password", help="8-100 chars with upper, lower and digit")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.CUSTOMER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    try:
        data = RegisterRequest(
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    except ValidationError as e:
        for err in e.errors():
            print(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}", file=sys.stderr)
        return 1

    settings = get_settings()
    session_factory = build_session_factory(build_engine(settings))
    db = session_factory()
    try:
        existing = db.query(User).filter(User.email == data.email).first()
        if existing:
            print(f"User '{data.email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            role=args.role,
            is_active=True,
        )
        user.set_password(data.password, rounds=settings.BCRYPT_ROUNDS)
        db.add(user)
        db.commit()
        print(f"Created user '{data.email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
