"""Shared types of ML expression commands."""

from __future__ import annotations

import abc
from datetime import datetime, timedelta, timezone
from typing import Any, Optional, TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from ml_expr.adapters.plugin_client import AbstractPluginTransport

OUTLIER = "outlier"

DEFAULT_INTERVAL = timedelta(minutes=1)

# Fractional seconds are appended by format_time with trailing zeros trimmed
TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def format_time(value: datetime) -> str:
    """Format a window bound the way the ML plugin API expects it."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    formatted = value.strftime(TIME_FORMAT)
    if value.microsecond:
        formatted += "." + f"{value.microsecond:06d}".rstrip("0")
    return formatted


def to_milliseconds(interval: timedelta) -> int:
    """Express an interval as whole milliseconds, truncating any remainder."""
    return interval // timedelta(milliseconds=1)


class MLCommand(abc.ABC):
    """
    A validated ML expression ready to run against the plugin API.

    Implementations carry the ``datasource_uid`` of the data source the
    analysis reads from.
    """

    datasource_uid: str

    @abc.abstractmethod
    def execute(self, from_time: datetime, to_time: datetime, transport: AbstractPluginTransport) -> Any:
        """
        Run the command for the given time window.

        Args:
            from_time: Start of the window
            to_time: End of the window
            transport: Transport performing the plugin API call

        Returns:
            The ``data`` member of the plugin response
        """
        raise NotImplementedError


class PluginResponse(BaseModel):
    """Envelope returned by the ML plugin API."""
    status: Optional[str] = None
    data: Optional[Any] = None
    error: Optional[str] = None


class MLCommandError(Exception):
    """Base exception for ML command failures."""
    pass


class CommandValidationError(MLCommandError):
    """Exception raised when a query cannot be turned into a command."""
    pass


class SerializationError(MLCommandError):
    """Exception raised when a payload or response cannot be (de)serialized."""
    pass


class PluginAPIError(MLCommandError):
    """Exception raised when the plugin API answers with an error message."""
    pass
