"""Commands for the ML expression service."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict

from shared.domain.commands import Command


@dataclass
class EvaluateMLQuery(Command):
    """Command to run an ML expression query over a time window."""
    query: Dict[str, Any]
    from_time: datetime
    to_time: datetime
    cookies: Dict[str, str] = field(default_factory=dict)  # incoming request cookies, filtered per data source
