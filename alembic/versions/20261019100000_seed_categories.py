"""Seed the shared category list.

Revision ID: 20261019100000
Revises: 20261019000000
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019100000"
down_revision: Union[str, None] = "20261019000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CATEGORY_NAMES = (
    "Strategy",
    "Party",
    "Family",
    "Cooperative",
    "Deck Building",
    "Worker Placement",
    "Abstract",
    "War Game",
)

categories = sa.table(
    "categories",
    sa.column("id", sa.Integer()),
    sa.column("name", sa.String(length=50)),
)


def upgrade() -> None:
    op.bulk_insert(categories, [{"name": name} for name in CATEGORY_NAMES])


def downgrade() -> None:
    op.execute(categories.delete().where(categories.c.name.in_(CATEGORY_NAMES)))
