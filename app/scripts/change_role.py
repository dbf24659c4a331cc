"""
Promote or demote an account's role from the command line. Run from project root:
  python -m app.scripts.change_role
  python -m app.scripts.change_role --email alice@example.com --role ADMIN

Prompts for anything not given as an option and always asks for confirmation
unless --yes is passed. Exit code 0 on success or when the change is declined,
1 on any failure.
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.errors import Failure, FailureKind
from app.schemas.account import ROLE_VALUES, AccountOut
from app.services.account_store import AccountStore, StoreError
from app.services.accounts import AccountService, to_account_out

logger = logging.getLogger(__name__)


def _print_account(account: AccountOut, role_label: str = "Current Role") -> None:
    print("------------------")
    print(f"Name: {account.name}")
    print(f"Email: {account.email}")
    print(f"{role_label}: {account.role}")


def _ask_confirmation(account: AccountOut, new_role: str) -> bool:
    answer = input(
        f"\nAre you sure you want to change {account.email}'s role "
        f"from {account.role} to {new_role}? (y/N): "
    )
    return answer.strip().lower() == "y"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Change an account's role (USER or ADMIN).")
    parser.add_argument("--email", help="Email of the account to change")
    parser.add_argument("--role", help="New role: USER or ADMIN")
    parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        store = AccountStore(db)
        email = args.email or input("Enter user email: ").strip()

        current = store.find_by_email(email)
        if current is None:
            print("Error: User not found", file=sys.stderr)
            return 1
        print("\nCurrent user info:")
        _print_account(to_account_out(current))
        print("\nAvailable roles:", ", ".join(sorted(ROLE_VALUES)))

        new_role = args.role or input("\nEnter new role: ").strip()
        confirm = (lambda _account, _role: True) if args.yes else _ask_confirmation

        result = AccountService(store).change_role(email, new_role, confirm)
        if isinstance(result, Failure):
            if result.kind is FailureKind.CANCELLED:
                print(result.message)
                return 0
            print(f"Error: {result.message}", file=sys.stderr)
            return 1

        print("\nUser role updated successfully!")
        _print_account(result, role_label="New Role")
        return 0
    except (EOFError, KeyboardInterrupt):
        print("\nOperation cancelled")
        return 0
    except StoreError as e:
        logger.exception("Role change failed: %s", e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    sys.exit(main())
