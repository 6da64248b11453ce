"""Outlier detection command for the ML plugin API."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Mapping, TYPE_CHECKING

from pydantic import ValidationError

from ml_expr.domain.model import (
    DEFAULT_INTERVAL,
    MLCommand,
    PluginAPIError,
    PluginResponse,
    CommandValidationError,
    SerializationError,
    format_time,
    to_milliseconds,
)

if TYPE_CHECKING:
    from ml_expr.adapters.plugin_client import AbstractPluginTransport

logger = logging.getLogger(__name__)

OUTLIER_PATH = "/proxy/api/v1/outlier"


@dataclass(frozen=True)
class OutlierCommand(MLCommand):
    query: bytes  # serialized `config` object, passed through to the plugin API
    datasource_uid: str
    app_url: str
    interval: timedelta = DEFAULT_INTERVAL

    def execute(self, from_time: datetime, to_time: datetime, transport: AbstractPluginTransport) -> Any:
        """
        Send the outlier query for [from_time, to_time] and decode the answer.

        The stored configuration is sent back unchanged except for two keys:
        ``start_end_attributes`` (window and interval) and ``grafana_url``.

        Raises:
            SerializationError: If the configuration or the response cannot be decoded
            PluginAPIError: If the response carries a non-empty ``error``

        Exceptions raised by the transport propagate unchanged.
        """
        try:
            attributes = json.loads(self.query)
        except ValueError as e:
            raise SerializationError(f"cannot unmarshal outlier command configuration: {e}") from e
        if not isinstance(attributes, dict):
            raise SerializationError("cannot unmarshal outlier command configuration: expected an object")

        attributes["start_end_attributes"] = {
            "start": format_time(from_time),
            "end": format_time(to_time),
            "interval": to_milliseconds(self.interval),
        }
        attributes["grafana_url"] = self.app_url

        payload = {
            "data": {
                "attributes": attributes,
            }
        }
        try:
            body = json.dumps(payload, allow_nan=False).encode("utf-8")
        except ValueError as e:
            raise SerializationError(f"cannot marshal outlier request payload: {e}") from e

        logger.info(f"Sending outlier query for data source {self.datasource_uid} to {OUTLIER_PATH}")
        response_body = transport.send(OUTLIER_PATH, body)

        try:
            response = PluginResponse.model_validate_json(response_body)
        except ValidationError as e:
            raise SerializationError(f"cannot unmarshal response from plugin API: {e}") from e

        if response.error:
            raise PluginAPIError(response.error)
        return response.data


def unmarshal_outlier_command(query: Mapping[str, Any], app_url: str) -> OutlierCommand:
    """
    Build an OutlierCommand from an untyped query document.

    Args:
        query: Document with an optional ``intervalMs`` and a ``config`` object
        app_url: URL of the calling application

    Returns:
        Validated OutlierCommand

    Raises:
        CommandValidationError: If ``intervalMs``, ``config`` or
            ``config.datasource_uid`` is missing or has the wrong type
        SerializationError: If ``config`` cannot be serialized
    """
    interval = DEFAULT_INTERVAL
    interval_ms = query.get("intervalMs")
    if interval_ms is not None:
        if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)):
            raise CommandValidationError("field `intervalMs` is expected to be a number")
        try:
            interval = timedelta(milliseconds=int(interval_ms))
        except (OverflowError, ValueError) as e:
            raise CommandValidationError("field `intervalMs` is expected to be a number") from e

    cfg = query.get("config")
    if not isinstance(cfg, Mapping):
        raise CommandValidationError("field `config` is required and should be object")

    datasource_uid = cfg.get("datasource_uid")
    if not isinstance(datasource_uid, str) or not datasource_uid:
        raise CommandValidationError("field `config.datasource_uid` is required and should be string")

    try:
        raw = json.dumps(dict(cfg), allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"cannot marshal outlier command configuration: {e}") from e

    return OutlierCommand(
        query=raw,
        datasource_uid=datasource_uid,
        app_url=app_url,
        interval=interval,
    )
