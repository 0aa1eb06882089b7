from __future__ import annotations


class SinceWhenError(Exception):
    """Base class for errors reported back to the front end."""


class ValidationError(SinceWhenError, ValueError):
    pass


class NotFoundError(SinceWhenError, LookupError):
    pass


class InvalidInputError(SinceWhenError, ValueError):
    pass


class PersistenceError(SinceWhenError):
    pass


class ConfigError(SinceWhenError):
    pass
