"""
itgfetch
Slash command that fetches JSON directly or PUTs through the Extras proxy.
"""

from itgfetch.dispatcher import (
    USAGE,
    BasicRequestParams,
    Dispatcher,
    DispatchResult,
    Err,
    ExtrasRequestParams,
    Ok,
    RequestMode,
)
from itgfetch.errors import FetchError, SerializationError, TransportError, ValidationError

__all__ = [
    "USAGE",
    "BasicRequestParams",
    "Dispatcher",
    "DispatchResult",
    "Err",
    "ExtrasRequestParams",
    "Ok",
    "RequestMode",
    "FetchError",
    "SerializationError",
    "TransportError",
    "ValidationError",
]
