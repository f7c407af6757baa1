"""Two-stage authorization: stage 1 marks privileged callers, stage 2 enforces the mark."""

from typing import Any

from bgcatalog.core.errors import Forbidden, Unauthenticated
from bgcatalog.schemas.account import Identity


def grant_privileged(context: Any, identity: Identity | None, role_name: str) -> None:
    """
    Stage 1. Sets context.authorized when the identity holds the privileged role.

    Any other role passes through without the flag; the refusal happens in stage 2.
    """
    if identity is None:
        raise Unauthenticated("Access denied: authentication required")
    if identity.role.name == role_name:
        context.authorized = True


def check_authorized(context: Any) -> None:
    """Stage 2. Refuse unless stage 1 set context.authorized."""
    if not getattr(context, "authorized", False):
        raise Forbidden("Access denied: authorisation failed")
