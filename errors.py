from __future__ import annotations


class FeederError(Exception):
    """Base class for errors raised by notebookFeeder."""


class ConfigError(FeederError, ValueError):
    pass


class MissingInputError(FeederError):
    pass


class ReadError(FeederError):
    pass


class UIDriverError(FeederError):
    pass


class WriteError(FeederError):
    pass
