# pylint: disable=attribute-defined-outside-init
from __future__ import annotations
import abc
from typing import Callable, Dict
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session


import config
from datasources.adapters import repository
from ml_expr.adapters import plugin_client

TransportFactory = Callable[[Dict[str, str]], plugin_client.AbstractPluginTransport]


class AbstractUnitOfWork(abc.ABC):
    datasources: repository.AbstractRepository

    def __enter__(self) -> AbstractUnitOfWork:
        return self

    def __exit__(self, *args):
        self.rollback()

    @abc.abstractmethod
    def transport_factory(self, cookies: Dict[str, str]) -> plugin_client.AbstractPluginTransport:
        """Create the transport used for one command execution."""
        raise NotImplementedError

    @abc.abstractmethod
    def rollback(self):
        raise NotImplementedError


DEFAULT_SESSION_FACTORY = sessionmaker(
    bind=create_engine(
        config.get_postgres_uri(),
        isolation_level="REPEATABLE READ",
    )
)


def http_transport_factory(cookies: Dict[str, str]) -> plugin_client.AbstractPluginTransport:
    return plugin_client.HTTPPluginTransport(cookies=cookies)


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(self, session_factory=DEFAULT_SESSION_FACTORY, transport_factory_impl: TransportFactory = None):
        self.session_factory = session_factory
        self.transport_factory_impl = transport_factory_impl or http_transport_factory

    def __enter__(self):
        self.session = self.session_factory()  # type: Session
        self.datasources = repository.SqlAlchemyRepository(self.session)
        return super().__enter__()

    def __exit__(self, *args):
        super().__exit__(*args)
        self.session.close()

    def transport_factory(self, cookies):
        return self.transport_factory_impl(cookies)

    def rollback(self):
        self.session.rollback()
