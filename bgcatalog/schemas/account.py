"""Request/response schemas for accounts, credentials and the authenticated identity."""

from pydantic import BaseModel, EmailStr, Field, field_validator

EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 3
ROLE_NAME_MAX_LEN = 50


def _validate_email_length(value: str | None) -> str | None:
    if value is not None and len(value) > EMAIL_MAX_LEN:
        raise ValueError(f"email must be at most {EMAIL_MAX_LEN} characters")
    return value


class RoleOut(BaseModel):
    """Role reference carried by an account; name is a denormalized copy."""

    model_config = {"from_attributes": True}

    id: int = Field(..., ge=1)
    name: str | None = Field(default=None, max_length=ROLE_NAME_MAX_LEN)


class AccountOut(BaseModel):
    """
    Account as exposed to callers. Also the authenticated identity embedded in tokens
    (account id, email, role).
    """

    model_config = {"from_attributes": True}

    id: int = Field(..., ge=1)
    email: EmailStr
    role: RoleOut

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        return _validate_email_length(v)


Identity = AccountOut


class Credentials(BaseModel):
    """Email/password pair for login."""

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        return _validate_email_length(v)


class PasswordIn(BaseModel):
    password: str = Field(..., min_length=PASSWORD_MIN_LEN)


class AccountEmailIn(BaseModel):
    email: EmailStr

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str) -> str:
        return _validate_email_length(v)


class AccountQuery(BaseModel):
    """Optional filters for GET /accounts; email takes precedence over roleid."""

    email: EmailStr | None = None
    roleid: int | None = Field(default=None, ge=1)

    @field_validator("email")
    @classmethod
    def check_email_length(cls, v: str | None) -> str | None:
        return _validate_email_length(v)
