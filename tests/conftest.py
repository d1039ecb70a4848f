import itertools
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from collegeadmin.api.deps import get_db
from collegeadmin.core.security import create_access_token, get_password_hash
from collegeadmin.db import Base
from collegeadmin.db.session import enable_sqlite_foreign_keys
from collegeadmin.db.models import Faculty, Profile, SchoolClass, Student
from collegeadmin.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_profile(db):
    counter = itertools.count(1)

    def _make(role="student", full_name=None, email=None, password="secret123"):
        n = next(counter)
        profile = Profile(
            email=email or f"{role}{n}@college.test",
            hashed_password=get_password_hash(password),
            full_name=full_name or f"{role.title()} {n}",
            role=role,
        )
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile

    return _make


@pytest.fixture
def auth_headers():
    def _headers(profile):
        token = create_access_token({"sub": str(profile.id), "role": profile.role})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin(make_profile):
    return make_profile("admin", full_name="Admin User")


@pytest.fixture
def school_class(db):
    school_class = SchoolClass(name="CSE-A", semester=3, section="A")
    db.add(school_class)
    db.commit()
    db.refresh(school_class)
    return school_class


@pytest.fixture
def make_student(db, make_profile):
    counter = itertools.count(1)

    def _make(class_id=None, full_name=None, with_profile=True, status="active", batch_id=None):
        n = next(counter)
        profile = make_profile("student", full_name=full_name) if with_profile else None
        student = Student(
            student_id=f"STU-{n:03d}",
            profile_id=profile.id if profile else None,
            class_id=class_id,
            batch_id=batch_id,
            status=status,
        )
        db.add(student)
        db.commit()
        db.refresh(student)
        return student

    return _make


@pytest.fixture
def make_faculty(db, make_profile):
    counter = itertools.count(1)

    def _make(full_name=None, department="CSE"):
        n = next(counter)
        profile = make_profile("faculty", full_name=full_name)
        faculty = Faculty(faculty_id=f"FAC-{n:03d}", profile_id=profile.id, department=department)
        db.add(faculty)
        db.commit()
        db.refresh(faculty)
        return faculty, profile

    return _make
