"""Login and auth dependencies (get_identity, grant_privileged_role, require_authorization)."""

import logging
from functools import lru_cache
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Request, Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from bgcatalog.core.config import get_settings
from bgcatalog.core.database import get_db
from bgcatalog.core.errors import (
    CatalogError,
    StoreCorruption,
    Unauthenticated,
    ValidationFailure,
)
from bgcatalog.core.security import TokenCodec
from bgcatalog.schemas.account import AccountOut, Credentials, Identity
from bgcatalog.services.authorization import check_authorized, grant_privileged
from bgcatalog.services.credentials import verify_credentials

logger = logging.getLogger(__name__)
router = APIRouter()


@lru_cache
def get_token_codec() -> TokenCodec:
    """Dependency: codec built once from settings."""
    return TokenCodec.from_settings(get_settings())


@router.post("", response_model=AccountOut)
def login(
    body: Annotated[dict[str, Any], Body()],
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AccountOut:
    """
    Authenticate with email and password. Returns the account identity in the body and
    the signed token in the authentication token header; send that header back on
    subsequent requests.
    """
    try:
        credentials = Credentials.model_validate(body)
    except ValidationError as e:
        raise ValidationFailure("Badly formatted request", e.errors(include_url=False)) from e

    try:
        identity = verify_credentials(db, credentials.email, credentials.password)
    except Exception as e:
        if isinstance(e, StoreCorruption) or not isinstance(e, CatalogError):
            logger.exception("Login failed on store error")
        else:
            logger.info("Login rejected", extra={"reason": type(e).__name__})
        raise Unauthenticated("Invalid account email or password") from e

    response.headers[get_settings().AUTH_TOKEN_HEADER] = codec.issue(identity)
    return identity


def get_identity(
    request: Request,
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> Identity:
    """Dependency: parse the token header. Raises 401 if missing or invalid."""
    token = request.headers.get(get_settings().AUTH_TOKEN_HEADER)
    return codec.parse(token)


def grant_privileged_role(
    request: Request,
    identity: Annotated[Identity, Depends(get_identity)],
) -> Identity:
    """Dependency, stage 1: flag the request when the caller holds the privileged role."""
    grant_privileged(request.state, identity, get_settings().PRIVILEGED_ROLE_NAME)
    return identity


def require_authorization(
    request: Request,
    identity: Annotated[Identity, Depends(grant_privileged_role)],
) -> Identity:
    """Dependency, stage 2: refuse with 403 unless stage 1 flagged the request."""
    check_authorized(request.state)
    return identity
