"""Account store: create, read, list, role update, password change and delete."""

import logging

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bgcatalog.core.database import transaction
from bgcatalog.core.errors import AccountNotFound, Conflict, NotFound, StoreCorruption
from bgcatalog.core.security import hash_password
from bgcatalog.models import Account, Password, Role
from bgcatalog.schemas.account import AccountOut

logger = logging.getLogger(__name__)


def _to_account_out(account: Account) -> AccountOut:
    """Validate a stored account; a row that does not validate means corrupt data."""
    try:
        return AccountOut.model_validate(account)
    except ValidationError as e:
        logger.error(
            "Stored account failed validation",
            extra={"account_id": account.id, "error_count": e.error_count()},
        )
        raise StoreCorruption(
            f"Corrupt DB, account does not validate: {account.id}",
            e.errors(include_url=False),
        ) from e


def _single(accounts: list[Account], description: str) -> Account:
    if len(accounts) > 1:
        raise StoreCorruption(f"Corrupt DB, multiple accounts with {description}")
    if not accounts:
        raise AccountNotFound(f"Account not found by {description}")
    return accounts[0]


def read_account_by_email(db: Session, email: str) -> AccountOut:
    """Exact-match lookup (case sensitivity follows the store collation)."""
    accounts = db.query(Account).filter(Account.email == email).all()
    return _to_account_out(_single(accounts, f"email: {email}"))


def read_account_by_id(db: Session, account_id: int) -> AccountOut:
    accounts = db.query(Account).filter(Account.id == account_id).all()
    return _to_account_out(_single(accounts, f"accountid: {account_id}"))


def list_accounts(
    db: Session,
    email: str | None = None,
    role_id: int | None = None,
) -> list[AccountOut]:
    """List accounts, optionally by email or (when no email is given) by role id."""
    query = db.query(Account)
    if email:
        query = query.filter(Account.email == email)
    elif role_id is not None:
        query = query.filter(Account.role_id == role_id)
    return [_to_account_out(a) for a in query.order_by(Account.id).all()]


def create_account(db: Session, email: str, password: str) -> AccountOut:
    """
    Insert the account and its password hash in one transaction. The role is assigned
    by the store default. A duplicate email is detected by the unique constraint.
    """
    hashed = hash_password(password)
    try:
        with transaction(db):
            account = Account(email=email)
            account.password = Password(hashed_password=hashed)
            db.add(account)
            db.flush()
            account_id = account.id
    except IntegrityError as e:
        logger.info("Account creation rejected: duplicate email")
        raise Conflict("Account already exists") from e
    logger.info("Account created", extra={"account_id": account_id})
    return read_account_by_id(db, account_id)


def update_account(db: Session, account: AccountOut) -> AccountOut:
    """Persist the account's role; returns the re-read account."""
    row = db.get(Account, account.id)
    if row is None:
        raise AccountNotFound(f"Account not found by accountid: {account.id}")
    if db.get(Role, account.role.id) is None:
        raise NotFound(f"Role not found by roleid: {account.role.id}")
    with transaction(db):
        row.role_id = account.role.id
    return read_account_by_id(db, account.id)


def change_password(db: Session, account_id: int, password: str) -> AccountOut:
    """Replace the stored hash for an existing account."""
    account = read_account_by_id(db, account_id)
    rows = db.query(Password).filter(Password.account_id == account_id).all()
    if len(rows) != 1:
        logger.error(
            "Password records corrupt",
            extra={"account_id": account_id, "row_count": len(rows)},
        )
        raise StoreCorruption(
            f"Corrupt DB, corrupted password information on accountid: {account_id}"
        )
    with transaction(db):
        rows[0].hashed_password = hash_password(password)
    return account


def delete_account(db: Session, account_id: int) -> AccountOut:
    """Delete the credential record and the account together; returns the deleted account."""
    account = read_account_by_id(db, account_id)
    with transaction(db):
        db.query(Password).filter(Password.account_id == account_id).delete(
            synchronize_session=False
        )
        db.query(Account).filter(Account.id == account_id).delete(
            synchronize_session=False
        )
    logger.info("Account deleted", extra={"account_id": account_id})
    return account
