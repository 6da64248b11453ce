import logging
from sqlalchemy import (
    Table,
    Column,
    Integer,
    String,
    Boolean,
    DateTime,
    JSON,
)
from sqlalchemy.orm import registry
from datasources.domain import model

logger = logging.getLogger(__name__)

mapper_registry = registry()
metadata = mapper_registry.metadata

data_source = Table(
    "data_source",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("org_id", Integer, nullable=False, default=0),
    Column("version", Integer, nullable=False, default=0),
    Column("name", String(190), nullable=False),
    Column("type", String(255), nullable=False),
    Column("access", String(255), nullable=False),
    Column("url", String(255), nullable=False, default=""),
    Column("user", String(255)),
    Column("database", String(255)),
    Column("basic_auth", Boolean, nullable=False, default=False),
    Column("basic_auth_user", String(255)),
    Column("with_credentials", Boolean, nullable=False, default=False),
    Column("is_default", Boolean, nullable=False, default=False),
    Column("read_only", Boolean, nullable=False, default=False),
    Column("json_data", JSON),
    Column("uid", String(40), unique=True, nullable=False),
    Column("created", DateTime),
    Column("updated", DateTime),
)


def start_mappers():
    logger.info("Starting mappers")
    mapper_registry.map_imperatively(model.DataSource, data_source)
