# collegeadmin/api/deps.py
from typing import Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from collegeadmin.core.roles import Capability, Role, has_capability
from collegeadmin.core.security import decode_access_token
from collegeadmin.crud.faculty import get_faculty_for_profile
from collegeadmin.db.models import Faculty, Profile
from collegeadmin.db.session import SessionLocal

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Profile:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
        profile_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")

    profile = db.get(Profile, profile_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return profile


def current_role(profile: Profile) -> Role:
    return Role(profile.role)


def require_capability(capability: Capability):
    """Зависимость: пускает только роли, у которых есть capability."""

    def checker(current_user: Profile = Depends(get_current_user)) -> Profile:
        if not has_capability(current_role(current_user), capability):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not allowed for your role")
        return current_user

    return checker


def get_current_faculty(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Faculty:
    faculty = get_faculty_for_profile(db, current_user.id)
    if faculty is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="No faculty record linked to this account")
    return faculty
