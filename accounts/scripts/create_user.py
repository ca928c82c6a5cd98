"""
Create a user (e.g. the first admin) without going through the HTTP API. Run from project root:
  python -m accounts.scripts.create_user EMAIL PASSWORD [role] [--name NAME] [--city CITY]
Example:
  python -m accounts.scripts.create_user admin@example.com your-secure-password ADMIN --name Admin
"""
import argparse
import logging
import sys

from accounts.core.config import get_settings
from accounts.core.database import session_scope
from accounts.core.security import EMAIL_MAX_LEN, EMAIL_MIN_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from accounts.models.user import ROLE_ADMIN, ROLE_USER
from accounts.services.account_service import AccountService

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a user account.")
    parser.add_argument("email", help=f"Login email ({EMAIL_MIN_LEN}-{EMAIL_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=[ROLE_USER, ROLE_ADMIN])
    parser.add_argument("--name", default=None)
    parser.add_argument("--city", default=None)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    email = args.email.strip()
    if not (EMAIL_MIN_LEN <= len(email) <= EMAIL_MAX_LEN):
        print("Invalid email length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    with session_scope() as db:
        service = AccountService.for_session(db, get_settings())
        result = service.register(
            email=email,
            password=args.password,
            name=args.name,
            city=args.city,
            role=args.role,
        )
    if result.status_code != 200:
        print(f"{result.message}: {result.error}" if result.error else result.message, file=sys.stderr)
        return 1
    print(f"Created user '{email}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
