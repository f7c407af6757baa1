"""ORM models for accounts, roles and stored credentials (auth and RBAC)."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from bgcatalog.models.base import Base

# Role assigned by the store when an account is created without one.
DEFAULT_ROLE_ID = 2


class Role(Base):
    """
    Fixed set of roles. Exactly one name is privileged (PRIVILEGED_ROLE_NAME, 'admin').
    """

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True)


class Account(Base):
    """Account identity. The password hash lives in a separate, never-exposed table."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role_id = Column(
        Integer,
        ForeignKey("roles.id"),
        nullable=False,
        server_default=str(DEFAULT_ROLE_ID),
    )

    role = relationship(Role, lazy="joined")
    password = relationship(
        "Password",
        uselist=False,
        back_populates="account",
        cascade="all, delete-orphan",
    )


class Password(Base):
    """One bcrypt hash per account, related 1:1 by account id."""

    __tablename__ = "passwords"

    id = Column(Integer, primary_key=True, autoincrement=True)
    account_id = Column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    hashed_password = Column(String(255), nullable=False)

    account = relationship(Account, back_populates="password")
