"""
Create an account from the command line. Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD volunteer --first-name Ada --last-name Lovelace
  python -m app.scripts.create_user EMAIL PASSWORD ngo --organization "Help Foundation" --contact "Jane Smith"
"""
import argparse
import sys

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.core.errors import AppError
from app.core.security import PasswordHasher
from app.services.credential_store import UserStore, parse_registration


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an NGO Connect account.")
    parser.add_argument("email")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("user_type", choices=["volunteer", "ngo"])
    parser.add_argument("--first-name", default="")
    parser.add_argument("--last-name", default="")
    parser.add_argument("--organization", default="", help="Organization name (ngo)")
    parser.add_argument("--contact", default="", help="Contact person (ngo)")
    args = parser.parse_args(argv)

    body = {
        "email": args.email,
        "password": args.password,
        "userType": args.user_type,
        "firstName": args.first_name,
        "lastName": args.last_name,
        "organizationName": args.organization,
        "contactPerson": args.contact,
    }

    settings = get_settings()
    session_factory = build_session_factory(build_engine(settings))
    db = session_factory()
    try:
        store = UserStore(db, PasswordHasher(rounds=settings.BCRYPT_ROUNDS))
        user = store.create(parse_registration(body))
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created {user.user_type} account '{user.email}' (id {user.id}).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
