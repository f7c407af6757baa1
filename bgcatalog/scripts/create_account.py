"""
Create an account (e.g. the first admin). Run from project root:
  python -m bgcatalog.scripts.create_account EMAIL PASSWORD [role]
Example:
  python -m bgcatalog.scripts.create_account admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from bgcatalog.core.database import SessionLocal
from bgcatalog.core.errors import CatalogError
from bgcatalog.models import Role
from bgcatalog.schemas.account import AccountOut, PASSWORD_MIN_LEN, RoleOut
from bgcatalog.services.accounts import create_account, update_account

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a catalog account.")
    parser.add_argument("email", help="Account email (max 255 chars)")
    parser.add_argument("password", help=f"Password (min {PASSWORD_MIN_LEN} chars)")
    parser.add_argument("role", nargs="?", default=None, help="Role name, e.g. admin")
    args = parser.parse_args(argv)

    email = args.email.strip()
    if not email or len(email) > 255:
        print("Invalid email length.", file=sys.stderr)
        return 1
    if len(args.password) < PASSWORD_MIN_LEN:
        print(f"Password must be at least {PASSWORD_MIN_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        role = None
        if args.role:
            role = db.query(Role).filter(Role.name == args.role).first()
            if role is None:
                print(f"Role '{args.role}' does not exist.", file=sys.stderr)
                return 1
        account = create_account(db, email, args.password)
        if role is not None and account.role.id != role.id:
            account = update_account(
                db,
                AccountOut(id=account.id, email=account.email, role=RoleOut(id=role.id)),
            )
        logger.info(
            "Created account '%s' with role '%s'.", account.email, account.role.name
        )
        return 0
    except CatalogError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
