import logging
from typing import Any

import config
from ml_expr.domain.commands import EvaluateMLQuery
from ml_expr.domain.model import MLCommandError
from ml_expr.domain.unmarshal import unmarshal_command
from ml_expr.service_layer.unit_of_work import AbstractUnitOfWork
from ml_expr.adapters.plugin_client import PluginTransportError
from shared.domain.fields import FieldError

logger = logging.getLogger(__name__)


def evaluate_ml_query(
    command: EvaluateMLQuery,
    uow: AbstractUnitOfWork
) -> Any:
    """
    Run an ML expression query against the ML plugin API.

    Flow:
    1. Build the ML command from the query document
    2. Resolve the data source the command reads from
    3. Keep only the cookies the data source allows
    4. Execute the command through the plugin transport

    Args:
        command: EvaluateMLQuery command with query document and time window
        uow: Unit of work giving access to data sources and the transport

    Returns:
        The result returned by the plugin API

    Raises:
        MLCommandError: If the query is invalid or the plugin API reports an error
        DataSourceNotFound: If the referenced data source does not exist
        PluginTransportError: If the plugin API cannot be reached
    """
    try:
        ml_command = unmarshal_command(command.query, config.get_app_url())
    except MLCommandError as e:
        logger.error(f"Rejected invalid ML query: {e}")
        raise

    uid = ml_command.datasource_uid
    logger.info(f"Processing EvaluateMLQuery command for data source {uid}")

    try:
        with uow:
            data_source = uow.datasources.get(uid)
            if data_source is None:
                raise DataSourceNotFound(f"Data source {uid} not found")

            allowed = data_source.allowed_cookies(config.is_allowed_cookie_regex_enabled())
            cookies = allowed.filter(command.cookies)
            logger.info(f"Forwarding {len(cookies)} of {len(command.cookies)} cookies for data source {uid}")

        transport = uow.transport_factory(cookies)
        result = ml_command.execute(command.from_time, command.to_time, transport)

        logger.info(f"Successfully evaluated ML query for data source {uid}")
        return result

    except DataSourceNotFound as e:
        logger.error(f"Rejected ML query: {e}")
        raise

    except FieldError as e:
        logger.error(f"Invalid settings for data source {uid}: {e}")
        raise

    except PluginTransportError as e:
        logger.error(f"Failed to reach plugin API for data source {uid}: {e}")
        raise

    except MLCommandError as e:
        logger.error(f"ML query for data source {uid} failed: {e}")
        raise


class DataSourceNotFound(Exception):
    """Exception raised when a query references an unknown data source."""
    pass
