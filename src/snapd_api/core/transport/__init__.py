"""
Transport adapters package.

This package contains the transport layers the response core serves
through. Only the ASGI (FastAPI/Starlette) transport exists today.
"""

from __future__ import annotations
