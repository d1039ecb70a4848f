# collegeadmin/core/relations.py
"""
Сборка денормализованных записей: к корневой строке (например, студенту)
прикрепляются связанные сущности (профиль, класс, батч, счета...).

Вместо запроса на каждую строку собираем все внешние ключи уровня и делаем
один запрос IN (...) на тип связанной сущности, затем склеиваем в памяти.

Пути связей задаются через точку: "profile", "class.batch",
"student.profile", "faculty_assignments.faculty.profile".
Связь "к одному" без ключа или без строки даёт None, связь "ко многим"
без строк даёт []. Ошибка БД при загрузке одной связи не прерывает
остальные: связь становится None, а в Resolution.warnings появляется запись.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from collegeadmin.core.errors import InvalidInputError, NotFoundError, RemoteFailureError
from collegeadmin.db.models import (
    Attendance,
    Batch,
    Circular,
    Course,
    Faculty,
    FacultyAssignment,
    FeeInvoice,
    Profile,
    Result,
    SchoolClass,
    Student,
    Subject,
)

logger = logging.getLogger(__name__)

# Поля, которые никогда не попадают в представление
HIDDEN_FIELDS = frozenset({"hashed_password"})

# SQLite ограничивает число параметров в запросе
IN_CHUNK_SIZE = 500


@dataclass(frozen=True)
class Relation:
    target: Any
    local_key: str
    remote_key: str = "id"
    many: bool = False


@dataclass(frozen=True)
class RelationWarning:
    path: str
    message: str


@dataclass
class Resolution:
    records: List[Dict[str, Any]]
    warnings: List[RelationWarning] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return bool(self.warnings)

    @property
    def record(self) -> Optional[Dict[str, Any]]:
        return self.records[0] if self.records else None

    def as_payload(self) -> Dict[str, Any]:
        return {
            "items": self.records,
            "warnings": [{"path": w.path, "message": w.message} for w in self.warnings],
        }


RELATIONS: Dict[Any, Dict[str, Relation]] = {
    Student: {
        "profile": Relation(Profile, "profile_id"),
        "batch": Relation(Batch, "batch_id"),
        "class": Relation(SchoolClass, "class_id"),
        "attendance": Relation(Attendance, "id", "student_id", many=True),
        "results": Relation(Result, "id", "student_id", many=True),
        "fee_invoices": Relation(FeeInvoice, "id", "student_id", many=True),
    },
    Faculty: {
        "profile": Relation(Profile, "profile_id"),
        "assignments": Relation(FacultyAssignment, "id", "faculty_id", many=True),
    },
    SchoolClass: {
        "batch": Relation(Batch, "batch_id"),
        "faculty_assignments": Relation(FacultyAssignment, "id", "class_id", many=True),
        "subjects": Relation(Subject, "id", "class_id", many=True),
        "students": Relation(Student, "id", "class_id", many=True),
    },
    FacultyAssignment: {
        "faculty": Relation(Faculty, "faculty_id"),
        "class": Relation(SchoolClass, "class_id"),
    },
    Attendance: {
        "student": Relation(Student, "student_id"),
        "class": Relation(SchoolClass, "class_id"),
        "faculty": Relation(Faculty, "faculty_id"),
    },
    Result: {
        "student": Relation(Student, "student_id"),
        "class": Relation(SchoolClass, "class_id"),
        "subject": Relation(Subject, "subject_id"),
        "uploader": Relation(Faculty, "uploaded_by"),
    },
    FeeInvoice: {
        "student": Relation(Student, "student_id"),
    },
    Course: {
        "faculty": Relation(Faculty, "assigned_faculty_id"),
        "class": Relation(SchoolClass, "class_id"),
    },
    Subject: {
        "class": Relation(SchoolClass, "class_id"),
    },
    Circular: {
        "publisher": Relation(Profile, "published_by"),
    },
}


def to_record(row: Any) -> Dict[str, Any]:
    """ORM-строка -> словарь колонок (без скрытых полей)."""
    mapper = inspect(row).mapper
    return {
        attr.key: getattr(row, attr.key)
        for attr in mapper.column_attrs
        if attr.key not in HIDDEN_FIELDS
    }


def _path_tree(paths: Iterable[str]) -> Dict[str, dict]:
    tree: Dict[str, dict] = {}
    for path in paths:
        node = tree
        for part in path.split("."):
            if not part:
                raise InvalidInputError(f"Malformed relation path: {path!r}")
            node = node.setdefault(part, {})
    return tree


def _validate(model: Any, tree: Dict[str, dict], prefix: str = "") -> None:
    for name, subtree in tree.items():
        relation = RELATIONS.get(model, {}).get(name)
        if relation is None:
            raise InvalidInputError(f"Unknown relation '{prefix}{name}' for {model.__tablename__}")
        _validate(relation.target, subtree, f"{prefix}{name}.")


def _fetch_rows(db: Session, model: Any, column: str, keys: Sequence[Any]) -> List[Any]:
    rows: List[Any] = []
    key_column = getattr(model, column)
    for start in range(0, len(keys), IN_CHUNK_SIZE):
        chunk = keys[start:start + IN_CHUNK_SIZE]
        rows.extend(
            db.query(model).filter(key_column.in_(chunk)).order_by(model.id).all()
        )
    return rows


def _attach(
    db: Session,
    model: Any,
    records: List[Dict[str, Any]],
    tree: Dict[str, dict],
    prefix: str,
    warnings: List[RelationWarning],
) -> None:
    for name, subtree in tree.items():
        relation = RELATIONS[model][name]
        path = f"{prefix}{name}"

        keys = sorted({r.get(relation.local_key) for r in records} - {None})
        try:
            rows = _fetch_rows(db, relation.target, relation.remote_key, keys) if keys else []
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning("Relation %s could not be resolved: %s", path, e)
            warnings.append(RelationWarning(path=path, message=str(e)))
            for record in records:
                record[name] = None
            continue

        children = [to_record(row) for row in rows]

        if relation.many:
            grouped: Dict[Any, List[Dict[str, Any]]] = defaultdict(list)
            for child in children:
                grouped[child[relation.remote_key]].append(child)
            for record in records:
                record[name] = list(grouped.get(record.get(relation.local_key), []))
        else:
            by_key = {child[relation.remote_key]: child for child in children}
            for record in records:
                record[name] = by_key.get(record.get(relation.local_key))

        if subtree and children:
            _attach(db, relation.target, children, subtree, f"{path}.", warnings)


def resolve(db: Session, model: Any, rows: Iterable[Any], paths: Iterable[str] = ()) -> Resolution:
    tree = _path_tree(paths)
    _validate(model, tree)

    records = [row if isinstance(row, dict) else to_record(row) for row in rows]
    warnings: List[RelationWarning] = []
    if records and tree:
        _attach(db, model, records, tree, "", warnings)
    return Resolution(records=records, warnings=warnings)


def resolve_one(db: Session, model: Any, entity_id: Any, paths: Iterable[str] = ()) -> Resolution:
    """Как resolve(), но для одной строки по id. Ошибка корневого запроса фатальна."""
    try:
        row = db.get(model, entity_id)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to fetch %s id=%s", model.__tablename__, entity_id)
        raise RemoteFailureError(f"Failed to fetch {model.__tablename__}: {e}")
    if row is None:
        raise NotFoundError(f"{model.__tablename__} {entity_id} not found")
    return resolve(db, model, [row], paths)
