"""Request bodies. Wire names are camelCase."""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from docshare.domain.exceptions import ValidationError
from docshare.domain.value_objects import AccessLevel, DocumentType

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class RegisterRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class VerifyOtpRequest(RequestModel):
    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=12)


class ResendOtpRequest(RequestModel):
    email: EmailStr


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdateRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=100)


class PasswordChangeRequest(RequestModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class DocumentUpdateRequest(RequestModel):
    title: str | None = None
    description: str | None = None
    document_type: DocumentType | None = None


class ShareRequest(RequestModel):
    email: EmailStr
    access_level: AccessLevel = AccessLevel.VIEW


class AccessLevelRequest(RequestModel):
    access_level: AccessLevel


def _describe(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()) if p != "__root__")
    msg = err.get("msg", "Invalid value")
    return f"{loc}: {msg}" if loc else msg


def parse_body(model: type[ModelT], media: Any) -> ModelT:
    """Validate a decoded JSON body; failures become ValidationError (400)."""
    if not isinstance(media, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(media)
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from e
