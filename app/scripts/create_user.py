"""
Create an account (e.g. the first admin). Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Site Admin" admin@example.com 'Adm1n!pass' ADMIN
"""
import argparse
import sys

from pydantic import ValidationError

from app.core.database import SessionLocal
from app.core.errors import Failure
from app.schemas.account import ROLE_USER, ROLE_VALUES, RegisterRequest
from app.services.account_store import AccountStore
from app.services.accounts import AccountService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an account without going through the API.")
    parser.add_argument("name", help="Display name (2+ chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (8-30 chars, upper, lower, digit, special)")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=sorted(ROLE_VALUES))
    args = parser.parse_args(argv)

    try:
        body = RegisterRequest(
            name=args.name.strip(),
            email=args.email.strip(),
            password=args.password,
            role=args.role,
        )
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        service = AccountService(AccountStore(db))
        result = service.register(body.name, body.email, body.password, body.role)
        if isinstance(result, Failure):
            print(f"Cannot create '{body.email}': {result.message}.", file=sys.stderr)
            return 1
        print(f"Created account '{result.user.email}' (id={result.user.id}) with role '{result.user.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
