from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from collegeadmin.api.deps import get_db, get_current_user
from collegeadmin.crud import profile as crud_profile
from collegeadmin.core.security import create_access_token
from collegeadmin.db.models import Profile
from collegeadmin.schemas.auth import LoginRequest, ProfileOut, Token

router = APIRouter()


@router.post("/login", response_model=Token)
def login(form: LoginRequest, db: Session = Depends(get_db)):
    profile = crud_profile.authenticate(db, form.email, form.password)
    if not profile:
        raise HTTPException(status_code=401, detail="Invalid email or password")
    access_token = create_access_token(data={"sub": str(profile.id), "role": profile.role})
    return {"access_token": access_token, "token_type": "bearer"}


@router.get("/me", response_model=ProfileOut)
def me(current_user: Profile = Depends(get_current_user)):
    return current_user
