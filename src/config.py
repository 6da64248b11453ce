"""Configuration settings for the ML expression service."""

import os


def get_postgres_uri():
    """Get PostgreSQL connection URI from environment variables."""
    host = os.environ.get("DB_HOST", "localhost")
    port = 5433 if host == "localhost" else 5432
    password = os.environ.get("DB_PASSWORD", "ml_expr_pass")
    user = os.environ.get("DB_USER", "ml_expr_user")
    db_name = os.environ.get("DB_NAME", "ml_expr_db")
    return f"postgresql://{user}:{password}@{host}:{port}/{db_name}"


def get_app_url():
    """Get the public URL of the calling application, sent along with every ML query."""
    return os.environ.get("APP_URL", "http://localhost:3000/")


def get_plugin_api_url():
    """Get base URL of the ML plugin resource API."""
    return os.environ.get(
        "ML_PLUGIN_URL",
        "http://localhost:3000/api/plugins/grafana-ml-app/resources",
    ).rstrip("/")


def get_plugin_timeout():
    """Get ML plugin request timeout in seconds."""
    return int(os.environ.get("ML_PLUGIN_TIMEOUT", "30"))


def is_allowed_cookie_regex_enabled():
    """Feature flag for regex based cookie forwarding rules on data sources."""
    return os.environ.get("FEATURE_ALLOWED_COOKIE_REGEX_PATTERN", "false").lower() == "true"


def get_log_level():
    return os.environ.get("LOG_LEVEL", "INFO").upper()
