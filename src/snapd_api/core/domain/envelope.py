"""
The canonical JSON envelope.

Every non-streaming, non-file response is a single JSON object carrying the
response type, the numeric status, its reason phrase, the result and any
metadata, flattened into the top level.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, is_dataclass
from enum import Enum
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, Field

from snapd_api.core.constants import (
    FIELD_RESULT,
    FIELD_STATUS,
    FIELD_STATUS_CODE,
    FIELD_TYPE,
)
from snapd_api.core.domain.error_kinds import ErrorKind
from snapd_api.core.interfaces.model_bases import DomainModel, InternalDTO


class ResponseType(str, Enum):
    """The three envelope types: standard value, background operation, error."""

    SYNC = "sync"
    ASYNC = "async"
    ERROR = "error"


class Paging(DomainModel):
    """Paging information; both fields are always emitted."""

    page: int
    pages: int


class Meta(DomainModel):
    """Optional envelope metadata.

    Fields left at their empty value are omitted from the wire form.
    """

    sources: list[str] = Field(default_factory=list)
    paging: Paging | None = None
    suggested_currency: str = Field(default="", alias="suggested-currency")
    change: str = ""

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {}
        if self.sources:
            wire["sources"] = list(self.sources)
        if self.paging is not None:
            wire["paging"] = self.paging.model_dump()
        if self.suggested_currency:
            wire["suggested-currency"] = self.suggested_currency
        if self.change:
            wire["change"] = self.change
        return wire


class ErrorResult(DomainModel):
    """The result of an error envelope. `message` is never omitted."""

    message: str
    kind: ErrorKind | None = None
    value: Any = None

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {"message": self.message}
        if self.kind is not None:
            wire["kind"] = self.kind.value
        if self.value is not None:
            wire["value"] = to_json_data(self.value)
        return wire


def status_text(status: int) -> str:
    """Return the reason phrase for an HTTP status, or "" when unknown."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def to_json_data(value: Any) -> Any:
    """Convert a result value into plain JSON-representable data.

    Pydantic models, dataclasses and error results are converted
    recursively; anything else is handed to the JSON encoder unchanged so
    that unsupported values fail there.
    """
    if isinstance(value, ErrorResult):
        return value.to_wire()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {k: to_json_data(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [to_json_data(v) for v in value]
    return value


@dataclass
class Envelope(InternalDTO):
    """Wire envelope backing the sync, async and error responses."""

    type: ResponseType
    status: int
    result: Any = None
    meta: Meta | None = None

    def to_wire(self) -> dict[str, Any]:
        """Build the top-level JSON object, meta fields flattened in."""
        wire: dict[str, Any] = {
            FIELD_TYPE: self.type.value,
            FIELD_STATUS_CODE: self.status,
            FIELD_STATUS: status_text(self.status),
            FIELD_RESULT: to_json_data(self.result),
        }
        if self.meta is not None:
            wire.update(self.meta.to_wire())
        return wire
