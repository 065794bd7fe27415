"""Exception types raised by the sniper service."""


class SnipeCordError(Exception):
    """Base class for all sniper errors."""


class ConfigError(SnipeCordError):
    """config.json is missing, unreadable or invalid."""


class SOCAPIError(SnipeCordError):
    """
    A Schedule of Classes request failed.

    Covers transport errors, non-200 responses and bodies that don't decode
    into the expected schema.
    """

    def __init__(self, message: str, url: str = None, status: int = None):
        super().__init__(message)
        self.url = url
        self.status = status
