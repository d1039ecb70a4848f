# collegeadmin/crud/base.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from collegeadmin.core.errors import ConflictError, NotFoundError, RemoteFailureError

logger = logging.getLogger(__name__)


def commit(db: Session, action: str) -> None:
    """commit() с переводом ошибок БД в доменные."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("Conflict while trying to %s: %s", action, e.orig)
        raise ConflictError(f"Failed to {action}: duplicate or invalid reference")
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Database error while trying to %s", action)
        raise RemoteFailureError(f"Failed to {action}: {e}")


def get_or_404(db: Session, model: Any, entity_id: Any):
    try:
        obj = db.get(model, entity_id)
    except SQLAlchemyError as e:
        db.rollback()
        raise RemoteFailureError(f"Failed to fetch {model.__tablename__}: {e}")
    if obj is None:
        raise NotFoundError(f"{model.__tablename__} {entity_id} not found")
    return obj


def list_all(db: Session, model: Any, *order_by: Any, **filters: Any) -> List[Any]:
    query = db.query(model).filter_by(**{k: v for k, v in filters.items() if v is not None})
    if order_by:
        query = query.order_by(*order_by)
    try:
        return query.all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to fetch %s", model.__tablename__)
        raise RemoteFailureError(f"Failed to fetch {model.__tablename__}: {e}")


def create(db: Session, model: Any, data: Dict[str, Any]):
    obj = model(**data)
    db.add(obj)
    commit(db, f"create {model.__tablename__}")
    db.refresh(obj)
    logger.info("Created %s id=%s", model.__tablename__, obj.id)
    return obj


def update(db: Session, obj: Any, data: Dict[str, Any]):
    # merge: меняем только переданные поля
    for key, value in data.items():
        setattr(obj, key, value)
    commit(db, f"update {obj.__tablename__}")
    db.refresh(obj)
    logger.info("Updated %s id=%s", obj.__tablename__, obj.id)
    return obj


def delete(db: Session, obj: Any) -> None:
    entity_id = obj.id
    db.delete(obj)
    commit(db, f"delete {obj.__tablename__}")
    logger.info("Deleted %s id=%s", obj.__tablename__, entity_id)


def find_one(db: Session, model: Any, **filters: Any) -> Optional[Any]:
    """Мягкий поиск: None, если строк нет."""
    try:
        return db.query(model).filter_by(**filters).first()
    except SQLAlchemyError as e:
        db.rollback()
        raise RemoteFailureError(f"Failed to fetch {model.__tablename__}: {e}")
