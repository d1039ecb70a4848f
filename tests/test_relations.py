from datetime import date

import pytest
from sqlalchemy import event
from sqlalchemy.exc import OperationalError

from collegeadmin.core import relations
from collegeadmin.core.errors import InvalidInputError, NotFoundError, RemoteFailureError
from collegeadmin.core.relations import resolve, resolve_one
from collegeadmin.db.models import Attendance, Batch, FacultyAssignment, SchoolClass, Student


def test_unset_batch_resolves_to_none(db, make_student):
    student = make_student()

    resolution = resolve_one(db, Student, student.id, ["profile", "batch", "class"])

    record = resolution.record
    assert record["batch"] is None
    assert record["class"] is None
    assert record["profile"]["full_name"].startswith("Student")
    assert "hashed_password" not in record["profile"]
    assert resolution.warnings == []


def test_nested_relation_path(db, make_student):
    batch = Batch(name="CSE 2024", department="CSE", year=2024)
    db.add(batch)
    db.commit()
    school_class = SchoolClass(name="CSE-B", semester=1, batch_id=batch.id)
    db.add(school_class)
    db.commit()
    student = make_student(class_id=school_class.id)

    record = resolve_one(db, Student, student.id, ["class.batch"]).record
    assert record["class"]["name"] == "CSE-B"
    assert record["class"]["batch"]["name"] == "CSE 2024"


def test_class_without_assignments_has_empty_roster(db, school_class):
    record = resolve_one(db, SchoolClass, school_class.id, ["faculty_assignments.faculty.profile"]).record
    assert record["faculty_assignments"] == []


def test_duplicate_assignments_are_kept(db, school_class, make_faculty):
    faculty, _ = make_faculty(full_name="Dr. Rao")
    db.add_all([
        FacultyAssignment(class_id=school_class.id, faculty_id=faculty.id, subject="DBMS"),
        FacultyAssignment(class_id=school_class.id, faculty_id=faculty.id, subject="DBMS"),
    ])
    db.commit()

    record = resolve_one(db, SchoolClass, school_class.id, ["faculty_assignments.faculty.profile"]).record
    assert len(record["faculty_assignments"]) == 2
    assert record["faculty_assignments"][0]["faculty"]["profile"]["full_name"] == "Dr. Rao"


def test_one_query_per_relation_level(db, engine, make_student, school_class):
    for _ in range(5):
        make_student(class_id=school_class.id)
    students = db.query(Student).all()

    statements = []

    def count(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT"):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", count)
    try:
        resolution = resolve(db, Student, students, ["profile", "class"])
    finally:
        event.remove(engine, "before_cursor_execute", count)

    assert len(resolution.records) == 5
    assert len(statements) == 2


def test_failed_relation_is_isolated(db, monkeypatch, make_student, school_class):
    student = make_student(class_id=school_class.id)
    original = relations._fetch_rows

    def flaky(db, model, column, keys):
        if model is SchoolClass:
            raise OperationalError("SELECT classes", {}, Exception("connection reset"))
        return original(db, model, column, keys)

    monkeypatch.setattr(relations, "_fetch_rows", flaky)

    resolution = resolve_one(db, Student, student.id, ["profile", "class.batch"])

    assert resolution.partial
    assert [w.path for w in resolution.warnings] == ["class"]
    assert resolution.record["class"] is None
    assert resolution.record["profile"] is not None


def test_to_many_relation_groups_by_key(db, make_student, school_class):
    first = make_student(class_id=school_class.id)
    second = make_student(class_id=school_class.id)
    db.add_all([
        Attendance(student_id=first.id, class_id=school_class.id, date=date(2025, 1, 1), status="present"),
        Attendance(student_id=first.id, class_id=school_class.id, date=date(2025, 1, 2), status="absent"),
    ])
    db.commit()

    records = resolve(db, Student, [first, second], ["attendance"]).records
    assert [a["status"] for a in records[0]["attendance"]] == ["present", "absent"]
    assert records[1]["attendance"] == []


def test_unknown_relation_path(db, make_student):
    student = make_student()
    with pytest.raises(InvalidInputError):
        resolve_one(db, Student, student.id, ["class.lecturer"])
    with pytest.raises(InvalidInputError):
        resolve(db, Student, [], ["profile..email"])


def test_missing_root_is_not_found(db):
    with pytest.raises(NotFoundError):
        resolve_one(db, Student, 999, ["profile"])


def test_root_fetch_failure_is_fatal(db, monkeypatch, make_student):
    student = make_student()

    def broken_get(*args, **kwargs):
        raise OperationalError("SELECT students", {}, Exception("database is locked"))

    monkeypatch.setattr(db, "get", broken_get)

    with pytest.raises(RemoteFailureError, match="Failed to fetch"):
        resolve_one(db, Student, student.id, ["profile"])
