# collegeadmin/crud/circular.py
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collegeadmin.core.errors import RemoteFailureError
from collegeadmin.core.roles import Role
from collegeadmin.db.models import Circular


def _aware(value: datetime) -> datetime:
    # SQLite возвращает datetime без tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def active_circulars(db: Session, role: Role, now: Optional[datetime] = None) -> List[Circular]:
    """Активные, не истёкшие циркуляры для роли (или для всех), новые первыми."""
    now = now or datetime.now(timezone.utc)
    try:
        rows = (
            db.query(Circular)
            .filter(Circular.is_active.is_(True))
            .order_by(Circular.published_at.desc(), Circular.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        db.rollback()
        raise RemoteFailureError(f"Failed to fetch circulars: {e}")

    audiences = {"all", role.value}
    return [
        c for c in rows
        if audiences.intersection(c.target_audience or ["all"])
        and (c.expires_at is None or _aware(c.expires_at) > now)
    ]
