"""Error taxonomy shared by the store, query layer and HTTP handlers."""


class LedgerError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict:
        """JSON body returned for this error."""
        return {"error": self.message}


class ValidationError(LedgerError):
    """A transaction body is missing a required field or holds an invalid value."""

    status_code = 400


class InvalidParameterError(LedgerError):
    """A query or path parameter is malformed or missing."""

    status_code = 400


class NotFoundError(LedgerError):
    """The referenced transaction does not exist."""

    status_code = 404

    def __init__(self, message: str = "Transaction not found"):
        super().__init__(message)

    def to_payload(self) -> dict:
        return {"message": self.message}


class StoreError(LedgerError):
    """Any other database-layer failure."""

    status_code = 500


def describe_validation_errors(errors: list) -> str:
    """Flatten pydantic-style error dicts into one human-readable line."""
    parts = []
    for err in errors:
        location = ".".join(str(loc) for loc in err.get("loc", ()) if loc not in ("body", "query", "path"))
        parts.append(f"{location}: {err['msg']}" if location else err["msg"])
    return "; ".join(parts) or "Invalid request"
