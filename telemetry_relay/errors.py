"""Errors recovered at the request boundary.

Each error carries the HTTP status and the message returned to the caller.
"""


class RelayError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(RelayError):
    """Inbound ingest body is missing required fields or is malformed."""

    status_code = 400
    message = "Missing required fields: record_type and payload are required"


class MethodNotAllowed(RelayError):
    status_code = 405
    message = "Method not allowed"


class InternalError(RelayError):
    status_code = 500
    message = "Internal server error"
