"""Message bus for ml_expr service following Cosmic Python pattern."""

from __future__ import annotations
import logging
from typing import Callable, Dict, Type, Union, TYPE_CHECKING

from shared.domain.commands import Command
from ml_expr.domain.commands import EvaluateMLQuery
from ml_expr.service_layer import handlers

if TYPE_CHECKING:
    from ml_expr.service_layer.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)

Message = Union[EvaluateMLQuery]


def handle(
    message: Message,
    uow: AbstractUnitOfWork,
):
    """Handle message with the appropriate handler and return its result."""
    if not isinstance(message, Command):
        raise Exception(f"{message} was not a Command")
    return handle_command(message, uow)


def handle_command(
    command: Command,
    uow: AbstractUnitOfWork,
):
    """Handle command by calling the registered command handler."""
    logger.info(f"Handling command {type(command).__name__}")
    try:
        handler = COMMAND_HANDLERS[type(command)]
        return handler(command, uow=uow)
    except Exception:
        logger.exception("Exception handling command %s", command)
        raise


# Command handlers - single handler per command type
COMMAND_HANDLERS = {
    EvaluateMLQuery: handlers.evaluate_ml_query,
}  # type: Dict[Type[Command], Callable]
