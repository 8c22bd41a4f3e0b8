"""
Machine-readable error kinds.

The kind of an error result lets API clients dispatch on the failure
independently of the HTTP status code. Only `LOGIN_REQUIRED`,
`SNAP_NOT_FOUND` and `APP_NOT_FOUND` are stamped by the responders
themselves; every other kind is chosen explicitly by calling code.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed vocabulary of error kinds as they appear on the wire."""

    # Authentication, store account and payment flows
    TWO_FACTOR_REQUIRED = "two-factor-required"
    TWO_FACTOR_FAILED = "two-factor-failed"
    LOGIN_REQUIRED = "login-required"
    INVALID_AUTH_DATA = "invalid-auth-data"
    TERMS_NOT_ACCEPTED = "terms-not-accepted"
    NO_PAYMENT_METHODS = "no-payment-methods"
    PAYMENT_DECLINED = "payment-declined"
    PASSWORD_POLICY = "password-policy"

    # Install state
    SNAP_ALREADY_INSTALLED = "snap-already-installed"
    SNAP_NOT_INSTALLED = "snap-not-installed"
    SNAP_NOT_FOUND = "snap-not-found"
    APP_NOT_FOUND = "app-not-found"
    SNAP_LOCAL = "snap-local"
    SNAP_NO_UPDATE_AVAILABLE = "snap-no-update-available"

    NOT_SNAP = "snap-not-a-snap"

    # Device capabilities
    SNAP_NEEDS_DEVMODE = "snap-needs-devmode"
    SNAP_NEEDS_CLASSIC = "snap-needs-classic"
    SNAP_NEEDS_CLASSIC_SYSTEM = "snap-needs-classic-system"

    BAD_QUERY = "bad-query"

    NETWORK_TIMEOUT = "network-timeout"

    def __str__(self) -> str:
        return self.value
