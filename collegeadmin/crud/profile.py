# collegeadmin/crud/profile.py
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from collegeadmin.core.errors import ConflictError
from collegeadmin.core.security import get_password_hash, verify_password
from collegeadmin.crud.base import find_one
from collegeadmin.db.models import Profile


def get_profile_by_email(db: Session, email: str) -> Optional[Profile]:
    return find_one(db, Profile, email=email)


def authenticate(db: Session, email: str, password: str) -> Optional[Profile]:
    profile = get_profile_by_email(db, email)
    if not profile or not verify_password(password, profile.hashed_password):
        return None
    return profile


def provision_identity(
    db: Session,
    *,
    email: str,
    password: str,
    full_name: str,
    role: str,
    phone: Optional[str] = None,
) -> Profile:
    """
    Заводит учётную запись (email + пароль) и профиль к ней.

    Не коммитит: вызывающий создаёт студента/преподавателя в той же транзакции.
    """
    if get_profile_by_email(db, email):
        raise ConflictError(f"Email {email} is already registered")
    profile = Profile(
        email=email,
        hashed_password=get_password_hash(password),
        full_name=full_name,
        phone=phone,
        role=role,
    )
    db.add(profile)
    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Email {email} is already registered")
    return profile
