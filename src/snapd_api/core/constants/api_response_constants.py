"""Constants for API response values.

Content types, header names and framing bytes used on the wire.
"""

# Content types
CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_JSON_SEQ = "application/json-seq"
CONTENT_TYPE_ASSERTION = "application/x.ubuntu.assertion"

# Header names
HEADER_LOCATION = "Location"
HEADER_ASSERTIONS_COUNT = "X-Ubuntu-Assertions-Count"
HEADER_CACHE_CONTROL = "Cache-Control"
HEADER_ACCEL_BUFFERING = "X-Accel-Buffering"

# Envelope field names
FIELD_TYPE = "type"
FIELD_STATUS_CODE = "status-code"
FIELD_STATUS = "status"
FIELD_RESULT = "result"
FIELD_RESOURCE = "resource"
FIELD_ERROR = "error"

# Statuses whose result may carry a resource locator for the Location header
LOCATION_STATUSES = frozenset({201, 202})
LOCATION_SAFE_CHARS = "/:?&=%#@!$'()*+,;[]"

# RS, see ascii(7) and RFC 7464
RECORD_SEPARATOR = b"\x1e"

# Default size of the streaming output buffer (bytes)
DEFAULT_STREAM_BUFFER_SIZE = 4096
