"""
Base Schemas.

Error envelope and small shared response bodies.
"""

from datetime import datetime
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, Field, model_validator

from todoboard.backend.core.utils import utc_now

# SQLite INTEGER is a signed 64-bit value.
SortOrder = Annotated[int, Field(ge=-(2**63), le=2**63 - 1, description="Manual ordering key")]


class ResponseMetadata(BaseModel):
    """Metadata included in error responses."""

    timestamp: datetime = Field(default_factory=utc_now)
    request_id: str | None = None


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict[str, Any] | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = False
    data: None = None
    error: ErrorDetail
    metadata: ResponseMetadata = Field(default_factory=ResponseMetadata)


class OkResponse(BaseModel):
    """Acknowledgement body for deletes and bulk operations."""

    ok: bool = True


class HealthResponse(BaseModel):
    """Liveness and storage reachability."""

    ok: bool
    db: str


class PartialUpdate(BaseModel):
    """
    Base for partial update payloads.

    Omitted fields are left alone. An explicit null clears a nullable
    field; fields listed in non_nullable reject null.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_null_for_required_columns(self) -> "PartialUpdate":
        cleared = [
            name
            for name in self.model_fields_set
            if name in self.non_nullable and getattr(self, name) is None
        ]
        if cleared:
            raise ValueError(f"Field(s) cannot be null: {', '.join(sorted(cleared))}")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly present in the payload."""
        return self.model_dump(exclude_unset=True)
