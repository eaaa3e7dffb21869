"""
Error taxonomy for the control plane.

Every failure the API can report derives from StormgrError. The API layer
does not tell the kinds apart on the wire (all map to HTTP 500); the kinds
exist so the retry and defaulting code can decide what is recoverable.
"""


class StormgrError(Exception):
    """Base class for control plane failures"""


class StoreError(StormgrError):
    """Coordination store round-trip failed"""


class KeyNotFoundError(StoreError):
    """Requested key does not exist in the coordination store"""

    def __init__(self, key: str):
        super().__init__(f"key not found: {key}")
        self.key = key


class ConnectionFailedError(StormgrError):
    """Could not open an administrative session to the storage cluster"""


class MalformedStateError(StormgrError):
    """Data from the store or the cluster could not be parsed"""


class InvalidRequestError(StormgrError):
    """Caller-supplied request failed validation before any network call"""


class CommandFailedError(StormgrError):
    """The storage cluster rejected an administrative command"""

    def __init__(self, message: str, status: str = ""):
        super().__init__(message)
        self.status = status
