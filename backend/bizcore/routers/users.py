"""Sales pipeline user endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..models import User
from ..schemas import SalesRole, UserCreate, UserResponse, UserUpdate
from ..use_cases.records import delete_record, get_or_404
from ..use_cases.sales_users import create_user, list_users, update_user

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
def get_users(role: Optional[SalesRole] = None, db: Session = Depends(get_db)):
    """Get all users, optionally by role."""
    return list_users(db=db, role=role)


@router.post("", response_model=UserResponse, status_code=201)
def post_user(data: UserCreate, db: Session = Depends(get_db)):
    return create_user(db=db, role=data.role, name=data.name, email=data.email)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    """Get user by ID."""
    return get_or_404(db, User, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def patch_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db)):
    return update_user(db=db, user_id=user_id, changes=data.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    delete_record(db, get_or_404(db, User, user_id))
    return Response(status_code=204)
