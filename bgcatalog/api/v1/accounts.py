"""Account endpoints: registration, self-service and admin management."""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Path, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session

from bgcatalog.api.v1.auth import get_identity, require_authorization
from bgcatalog.core.database import get_db
from bgcatalog.core.errors import Forbidden, ValidationFailure
from bgcatalog.schemas.account import (
    AccountEmailIn,
    AccountOut,
    AccountQuery,
    Identity,
    PasswordIn,
)
from bgcatalog.services.accounts import (
    change_password,
    create_account,
    delete_account,
    list_accounts,
    read_account_by_id,
)

router = APIRouter()


def _validate_password(body: dict[str, Any]) -> str:
    try:
        return PasswordIn.model_validate({"password": body.get("password")}).password
    except ValidationError as e:
        raise ValidationFailure(
            "Password does not match requirements", e.errors(include_url=False)
        ) from e


@router.get("", response_model=list[AccountOut])
def get_accounts(
    _admin: Annotated[Identity, Depends(require_authorization)],
    db: Annotated[Session, Depends(get_db)],
    email: Annotated[str | None, Query()] = None,
    roleid: Annotated[str | None, Query()] = None,
) -> list[AccountOut]:
    """List accounts (admin only), optionally by email or, if no email is given, by role id."""
    try:
        query = AccountQuery.model_validate({"email": email, "roleid": roleid})
    except ValidationError as e:
        raise ValidationFailure("Badly formatted request", e.errors(include_url=False)) from e
    return list_accounts(db, email=query.email, role_id=query.roleid)


@router.get("/own", response_model=AccountOut)
def get_own_account(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountOut:
    """Return the caller's own account as currently stored."""
    return read_account_by_id(db, identity.id)


@router.get("/{account_id}", response_model=AccountOut)
def get_account(
    account_id: Annotated[int, Path(ge=1)],
    _admin: Annotated[Identity, Depends(require_authorization)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountOut:
    return read_account_by_id(db, account_id)


@router.post("", response_model=AccountOut)
def post_account(
    body: Annotated[dict[str, Any], Body()],
    db: Annotated[Session, Depends(get_db)],
) -> AccountOut:
    """Register an account with the default role. The password is checked before the email."""
    password = _validate_password(body)
    try:
        account_in = AccountEmailIn.model_validate({"email": body.get("email")})
    except ValidationError as e:
        raise ValidationFailure("Badly formatted request", e.errors(include_url=False)) from e
    return create_account(db, account_in.email, password)


@router.put("/own", response_model=AccountOut)
def put_own_account(
    identity: Annotated[Identity, Depends(get_identity)],
    db: Annotated[Session, Depends(get_db)],
    body: Annotated[dict[str, Any] | None, Body()] = None,
) -> AccountOut:
    """Update the caller's own account; a password in the body replaces the stored one."""
    account = read_account_by_id(db, identity.id)
    if body and body.get("password"):
        change_password(db, account.id, _validate_password(body))
    return account


@router.delete("/{account_id}", response_model=AccountOut)
def remove_account(
    account_id: Annotated[int, Path(ge=1)],
    admin: Annotated[Identity, Depends(require_authorization)],
    db: Annotated[Session, Depends(get_db)],
) -> AccountOut:
    """Delete an account (admin only). Admins cannot delete their own account."""
    if admin.id == account_id:
        raise Forbidden("Request denied: cannot delete account")
    return delete_account(db, account_id)
