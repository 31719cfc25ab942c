"""Exception hierarchy for dockctl commands."""

from typing import Optional


class DockctlError(Exception):
    """Base class for every error a dockctl command reports to the user."""


class ConfigError(DockctlError):
    """The settings file or environment could not be loaded."""


class RuntimeConnectionError(DockctlError):
    """The Docker daemon could not be reached."""


class RuntimeRequestError(DockctlError):
    """A call to the Docker daemon failed or was rejected."""


class ContainerNotFoundError(RuntimeRequestError):
    """The named container does not exist."""

    def __init__(self, name: str, detail: Optional[str] = None):
        self.name = name
        self.detail = detail
        message = f"No such container: '{name}'"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class InvalidRequestError(DockctlError):
    """A command was issued with missing or invalid arguments."""


class MalformedRecordError(DockctlError):
    """A record returned by the runtime lacks a required field."""

    def __init__(self, record_id: Optional[str], field: str, reason: str):
        self.record_id = record_id
        self.field = field
        self.reason = reason
        super().__init__(f"Malformed record {record_id!r}: field '{field}' {reason}")
