"""API key wire schemas.

Field aliases are the exact names the service uses on the wire.
"""

import re
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    field_serializer,
    field_validator,
)

from apikeys_client.api.core.constants import NIL_UUID, ZERO_TIME

# RFC 3339 fractional seconds longer than microsecond precision
_SUB_MICROSECOND = re.compile(r"(\.\d{6})\d+")


def _as_utc(value: datetime) -> datetime:
    # The service rejects timestamps without a zone offset
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class APIKey(BaseModel):
    """API key record as exchanged with the service."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", validate_assignment=True
    )

    id: UUID = Field(default=NIL_UUID, alias="ID")
    service_account_id: UUID = Field(default=NIL_UUID, alias="ServiceAccountID")
    api_key: str = Field(default="", alias="APIKey")
    created_at: datetime = Field(default=ZERO_TIME, alias="CreatedAt")
    updated_at: datetime = Field(default=ZERO_TIME, alias="UpdatedAt")
    valid: StrictBool = Field(default=False, alias="Valid")
    is_active: StrictBool = Field(default=False, alias="IsActive")

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _truncate_nanoseconds(cls, value: Any) -> Any:
        if isinstance(value, str):
            return _SUB_MICROSECOND.sub(r"\1", value)
        return value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @field_serializer("created_at", "updated_at")
    def _serialize_utc(self, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def is_usable(self) -> bool:
        """True when the key is both valid and enabled."""
        return self.valid and self.is_active

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict keyed by wire field names."""
        return self.model_dump(mode="json", by_alias=True)


class ValidateResponse(BaseModel):
    """Result of a point-in-time validation check."""

    model_config = ConfigDict(extra="ignore")

    is_valid: StrictBool
