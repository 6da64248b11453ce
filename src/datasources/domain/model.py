"""Configured data sources and their cookie forwarding rules."""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from shared.domain.fields import read_optional_value

logger = logging.getLogger(__name__)

DS_GRAPHITE = "graphite"
DS_INFLUXDB = "influxdb"
DS_INFLUXDB_08 = "influxdb_08"
DS_ES = "elasticsearch"
DS_PROMETHEUS = "prometheus"
DS_ALERTMANAGER = "alertmanager"
DS_JAEGER = "jaeger"
DS_LOKI = "loki"
DS_OPENTSDB = "opentsdb"
DS_TEMPO = "tempo"
DS_ZIPKIN = "zipkin"
DS_MYSQL = "mysql"
DS_POSTGRES = "postgres"
DS_MSSQL = "mssql"
DS_ES_OPEN_DISTRO = "grafana-es-open-distro-datasource"
DS_ES_OPENSEARCH = "grafana-opensearch-datasource"
DS_AZURE_MONITOR = "grafana-azure-monitor-datasource"

DS_ACCESS_PROXY = "proxy"

# Cookie name must match one of keep_cookies exactly
MO_EXACT_MATCH = "exact_match"
# Cookie name must match the configured regex
MO_REGEX_MATCH = "regex_match"


@dataclass
class AllowedCookies:
    match_option: str = MO_EXACT_MATCH
    match_pattern: str = ""
    keep_cookies: Optional[List[str]] = field(default_factory=list)

    def allows(self, cookie_name: str) -> bool:
        """Check whether a cookie may be forwarded to the data source."""
        if cookie_name in (self.keep_cookies or []):
            return True
        if self.match_option == MO_REGEX_MATCH and self.match_pattern:
            return re.fullmatch(self.match_pattern, cookie_name) is not None
        return False

    def filter(self, cookies: Dict[str, str]) -> Dict[str, str]:
        return {name: value for name, value in cookies.items() if self.allows(name)}


@dataclass(unsafe_hash=True)
class DataSource:
    name: str
    type: str
    uid: str
    url: str = ""
    access: str = DS_ACCESS_PROXY
    org_id: int = 0
    version: int = 0
    user: str = ""
    database: str = ""
    basic_auth: bool = False
    basic_auth_user: str = ""
    with_credentials: bool = False
    is_default: bool = False
    read_only: bool = False
    json_data: Optional[Dict[str, Any]] = field(default=None, compare=False, hash=False)
    created: Optional[datetime] = None
    updated: Optional[datetime] = None
    id: Optional[int] = None

    def allowed_cookies(self, regex_pattern_enabled: bool) -> AllowedCookies:
        """
        Resolve which cookies are kept when proxying to this data source.

        Exact matching is the default. The regex option and pattern from
        json_data are only honored when the regex feature flag is enabled.

        Args:
            regex_pattern_enabled: State of the allowed-cookie regex feature flag

        Returns:
            AllowedCookies for this data source

        Raises:
            FieldError: If json_data holds a value of the wrong type
        """
        allowed = AllowedCookies()
        if self.json_data is None:
            return allowed

        allowed.keep_cookies = read_optional_value(self.json_data, "keepCookies", list)

        if regex_pattern_enabled:
            pattern = read_optional_value(self.json_data, "allowedCookiePattern", str)
            if pattern is not None:
                allowed.match_pattern = pattern

            option = read_optional_value(self.json_data, "allowedCookieOption", str)
            if option in (MO_EXACT_MATCH, MO_REGEX_MATCH):
                allowed.match_option = option
            elif option is not None:
                logger.warning(f"Ignoring unknown allowedCookieOption {option!r} for data source {self.uid}")

            if allowed.match_pattern:
                try:
                    re.compile(allowed.match_pattern)
                except re.error as e:
                    logger.warning(f"Invalid allowedCookiePattern for data source {self.uid}: {e}, using exact match")
                    allowed.match_option = MO_EXACT_MATCH
                    allowed.match_pattern = ""

        return allowed
