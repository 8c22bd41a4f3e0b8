"""
Assertion bundles and their stream encoding.

Assertions are written back to back; a blank line separates consecutive
assertions so the stream can be split again by a decoder.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from snapd_api.core.common.exceptions import ResponseEncodingError
from snapd_api.core.interfaces.model_bases import InternalDTO
from snapd_api.core.interfaces.signed_document_interface import ISignedDocument

_NL = b"\n"
_NL2 = b"\n\n"


@dataclass
class AssertionBundle(InternalDTO):
    """Ordered assertions plus the bundle flag.

    More than one assertion always makes a bundle, whatever the caller asked.
    """

    assertions: Sequence[ISignedDocument] = field(default_factory=list)
    bundle: bool = False

    def __post_init__(self) -> None:
        self.assertions = list(self.assertions)
        if len(self.assertions) > 1:
            self.bundle = True


class AssertionStreamEncoder:
    """Turn assertions into consecutive chunks of an assertion stream."""

    def __init__(self) -> None:
        self._next_sep = b""

    def encode(self, assertion: ISignedDocument) -> bytes:
        """Return the bytes to write for the next assertion, separator included.

        Raises:
            ResponseEncodingError: If the assertion has an empty encoding or
                cannot be encoded at all.
        """
        try:
            encoded = assertion.encode()
        except ResponseEncodingError:
            raise
        except Exception as exc:
            raise ResponseEncodingError(str(exc)) from exc
        if not encoded:
            raise ResponseEncodingError("encoded assertion cannot be empty")
        chunk = self._next_sep + encoded
        self._next_sep = _NL if encoded.endswith(_NL) else _NL2
        return chunk
