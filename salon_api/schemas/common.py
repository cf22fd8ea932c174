"""Response envelope and shared schema configuration."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Base for API bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(BaseModel):
    """Success envelope without a payload."""

    success: bool = Field(default=True)
    message: str


class ApiResponse(MessageResponse, Generic[DataT]):
    """Success envelope: {success, message, data}."""

    data: DataT


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope: {success: false, message, code, errors?}."""

    success: bool = Field(default=False)
    message: str
    code: str
    errors: list[FieldError] | None = None
