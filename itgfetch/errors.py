"""Failures raised inside the dispatcher and turned into Err results."""


class FetchError(Exception):
    """Base class for dispatch failures."""


class ValidationError(FetchError):
    """A required parameter is missing or malformed."""


class TransportError(FetchError):
    """Network failure or non-success HTTP status."""


class SerializationError(FetchError):
    """Request body could not be encoded or response body is not JSON."""
