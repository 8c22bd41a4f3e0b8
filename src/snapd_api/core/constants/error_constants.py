"""Constants for error messages.

Message templates used by the responders and the exception handlers.
"""

GENERIC_INTERNAL_ERROR = "internal error: %s"
UNEXPECTED_ERROR = "an unexpected error occurred"

FILE_NOT_FOUND_ERROR = "cannot find file %r"
FILE_ACCESS_DENIED_ERROR = "cannot read file %r"
ENVELOPE_ENCODING_ERROR = "cannot marshal %r to JSON: %s"
STREAM_READ_ERROR = "cannot stream response; problem reading: %s"
STREAM_WRITE_ERROR = "cannot stream response; problem writing: %s"
ASSERTION_ENCODING_ERROR = "cannot write encoded assertion into response: %s"
