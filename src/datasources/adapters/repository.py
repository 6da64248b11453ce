import abc
from typing import Optional

from datasources.domain import model


class AbstractRepository(abc.ABC):

    def get(self, uid: str) -> Optional[model.DataSource]:
        return self._get(uid)

    @abc.abstractmethod
    def _get(self, uid: str) -> Optional[model.DataSource]:
        raise NotImplementedError


class SqlAlchemyRepository(AbstractRepository):
    def __init__(self, session):
        self.session = session

    def _get(self, uid):
        return self.session.query(model.DataSource).filter_by(uid=uid).first()
