"""Dispatch ML expression queries to the builder of their command type."""

from typing import Any, Callable, Dict, Mapping

from ml_expr.domain.model import OUTLIER, CommandValidationError, MLCommand
from ml_expr.domain.outlier import unmarshal_outlier_command

COMMAND_BUILDERS = {
    OUTLIER: unmarshal_outlier_command,
}  # type: Dict[str, Callable[[Mapping[str, Any], str], MLCommand]]


def unmarshal_command(query: Mapping[str, Any], app_url: str) -> MLCommand:
    command_type = query.get("type")
    builder = COMMAND_BUILDERS.get(command_type) if isinstance(command_type, str) else None
    if builder is None:
        supported = ", ".join(f"'{t}'" for t in COMMAND_BUILDERS)
        raise CommandValidationError(
            f"unsupported command type '{command_type if command_type is not None else ''}'. Supported only {supported}"
        )
    return builder(query, app_url)
