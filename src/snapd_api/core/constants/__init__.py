"""Constants module for the daemon API response layer.

This module contains the wire constants shared by the responders, encoders
and tests so that header names and media types are spelled in one place.
"""

# We are using wildcard imports here to make all constants easily accessible
# from a single import point.
from .api_response_constants import *  # noqa: F403
from .error_constants import *  # noqa: F403
