"""
FastAPI transport adapters.

This package turns handler results into Starlette responses: the envelope,
file, log stream and assertion bundle variants, the error responders and the
exception handlers that feed domain exceptions through the same envelope.
"""

from __future__ import annotations
