"""Credential verification: email/password pair to account identity."""

import logging

from sqlalchemy.orm import Session

from bgcatalog.core.errors import CredentialMismatch, StoreCorruption
from bgcatalog.core.security import verify_password
from bgcatalog.models import Password
from bgcatalog.schemas.account import Identity
from bgcatalog.services.accounts import read_account_by_email

logger = logging.getLogger(__name__)


def verify_credentials(db: Session, email: str, password: str) -> Identity:
    """
    Resolve an email/password pair to the account identity.

    Raises AccountNotFound for an unknown email, CredentialMismatch for a wrong
    password and StoreCorruption when the account does not have exactly one
    credential record. Callers facing the network must collapse all of these into
    one generic failure so an unknown email is indistinguishable from a bad password.
    """
    account = read_account_by_email(db, email)
    rows = db.query(Password).filter(Password.account_id == account.id).all()
    if len(rows) != 1:
        logger.error(
            "Password records corrupt",
            extra={"account_id": account.id, "row_count": len(rows)},
        )
        raise StoreCorruption(
            f"Corrupt DB, corrupted password information on accountid: {account.id}"
        )
    if not verify_password(password, rows[0].hashed_password):
        raise CredentialMismatch("Invalid account email or password")
    return account
