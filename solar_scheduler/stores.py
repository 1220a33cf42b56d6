# stores.py
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from . import db, logger
from .errors import PersistenceFailure


class RecordStore:
    """
    Storage collaborator used by the form controller and the services.

    Implementations raise PersistenceFailure when the backing store
    rejects a write.
    """

    def add(self, **fields):
        raise NotImplementedError

    def update(self, record, **fields):
        raise NotImplementedError

    def delete(self, record):
        raise NotImplementedError

    def query(self, sort_by: Optional[str] = None, ascending: bool = True, **filters) -> List:
        raise NotImplementedError


class ModelStore(RecordStore):
    """
    RecordStore over a SQLAlchemy model. With an ``owner`` every new
    record is stamped with the owner's id and queries only see the
    owner's records.
    """

    def __init__(self, model, owner=None):
        self.model = model
        self.owner = owner

    @property
    def _label(self):
        return self.model.__name__.lower()

    def add(self, **fields):
        if self.owner is not None:
            fields['user_id'] = self.owner.id
        record = self.model(**fields)
        try:
            record.save()
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self._label}: {str(e)}")
            raise PersistenceFailure(str(e)) from e
        logger.info(f"Created {self._label} {record.id}")
        return record

    def update(self, record, **fields):
        for key, value in fields.items():
            setattr(record, key, value)
        try:
            record.save()
        except SQLAlchemyError as e:
            logger.error(f"Error updating {self._label} {record.id}: {str(e)}")
            raise PersistenceFailure(str(e)) from e
        logger.info(f"Updated {self._label} {record.id}")
        return record

    def delete(self, record):
        record_id = record.id
        try:
            record.delete()
        except SQLAlchemyError as e:
            logger.error(f"Error deleting {self._label} {record_id}: {str(e)}")
            raise PersistenceFailure(str(e)) from e
        logger.info(f"Deleted {self._label} {record_id}")

    def get(self, record_id):
        record = self.model.get_by_id(record_id)
        if record is None:
            return None
        if self.owner is not None and record.user_id != self.owner.id:
            return None
        return record

    def query(self, sort_by=None, ascending=True, **filters):
        query = self.model.query
        if self.owner is not None:
            query = query.filter_by(user_id=self.owner.id)
        if filters:
            query = query.filter_by(**filters)
        if sort_by:
            column = getattr(self.model, sort_by)
            query = query.order_by(column.asc() if ascending else column.desc())
        else:
            query = query.order_by(self.model.id.asc())
        try:
            return query.all()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Error querying {self._label}: {str(e)}")
            raise PersistenceFailure(str(e)) from e
