from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ISignedDocument(Protocol):
    """A signed document (assertion) that knows its canonical wire form."""

    def encode(self) -> bytes:
        """Return the canonical signed encoding of the document."""
        ...
