"""Core configuration, database access, errors and security."""

from bgcatalog.core.config import get_settings, settings
from bgcatalog.core.database import get_db, transaction
from bgcatalog.core.errors import CatalogError

__all__ = ["CatalogError", "get_settings", "settings", "get_db", "transaction"]
