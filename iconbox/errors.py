"""
Error types raised by the store adapters and handlers.

``fastapi.HTTPException`` covers the request-level failures (401, 400,
404). These cover failures that originate below the handlers.
"""


class IconboxError(Exception):
    """Base class for service errors."""


class ServerConfigurationError(IconboxError):
    """A store the request needs has no backend configured."""


class StoreUnavailableError(IconboxError):
    """A store backend failed to answer (connection loss, client error)."""
