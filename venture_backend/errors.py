"""
Typed errors raised by the projection engine and the API.

Every error carries a machine-readable ``code`` and the HTTP status the API
layer answers with, so routes never have to parse messages.
"""


class VentureError(Exception):
    code = "VENTURE_ERROR"
    http_status = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class InvalidParameter(VentureError):
    """Malformed or out-of-range input (e.g. non-positive ``months``)."""

    code = "INVALID_PARAMETER"


class InvalidInterval(VentureError):
    """Interval whose end lies before its start."""

    code = "INVALID_INTERVAL"


class InvalidState(VentureError):
    """Transition not allowed from the entity's current state."""

    code = "INVALID_STATE"


class NotFound(VentureError):
    code = "NOT_FOUND"
    http_status = 404

    def __init__(self, kind, entity_id):
        super().__init__(f"{kind} not found")
        self.kind = kind
        self.entity_id = entity_id


class DivisionUndefined(VentureError):
    """ROI requested for a zero initial investment."""

    code = "DIVISION_UNDEFINED"
