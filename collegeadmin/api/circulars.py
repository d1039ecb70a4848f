# collegeadmin/api/circulars.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from collegeadmin.api.deps import current_role, get_db, require_capability
from collegeadmin.core.roles import Capability
from collegeadmin.crud import base as crud
from collegeadmin.crud.circular import active_circulars
from collegeadmin.db.models import Circular, Profile
from collegeadmin.schemas.circular import CircularCreate, CircularOut, CircularUpdate

router = APIRouter()

manage_circulars = require_capability(Capability.MANAGE_CIRCULARS)
read_circulars = require_capability(Capability.READ_CIRCULARS)


# Лента для текущей роли
@router.get("/", response_model=List[CircularOut])
def feed(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(read_circulars),
):
    return active_circulars(db, current_role(current_user))


@router.get("/all", response_model=List[CircularOut])
def list_all_circulars(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_circulars),
):
    return crud.list_all(db, Circular, Circular.published_at.desc(), Circular.id.desc())


@router.post("/", response_model=CircularOut, status_code=201)
def publish(
    circular_in: CircularCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_circulars),
):
    return crud.create(db, Circular, {**circular_in.model_dump(), "published_by": current_user.id})


@router.put("/{circular_id}", response_model=CircularOut)
def update_circular(
    circular_id: int,
    circular_update: CircularUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_circulars),
):
    circular = crud.get_or_404(db, Circular, circular_id)
    return crud.update(db, circular, circular_update.model_dump(exclude_unset=True))


@router.delete("/{circular_id}")
def delete_circular(
    circular_id: int,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(manage_circulars),
):
    crud.delete(db, crud.get_or_404(db, Circular, circular_id))
    return {"message": "Circular deleted"}
