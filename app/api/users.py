from fastapi import APIRouter, Depends, HTTPException
from app.db.session import get_storage
from app.api.deps import parse_id, get_or_404, internal_error
from app.schemas.schemas import UserCreate, UserUpdate, UserResponse
from app.storage.base import Storage

router = APIRouter(prefix="/api/users", tags=["users"])

NOT_FOUND = "User not found"


@router.get("", response_model=list[UserResponse])
def list_users(storage: Storage = Depends(get_storage)):
    with internal_error("Failed to retrieve users"):
        return storage.list_users()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, storage: Storage = Depends(get_storage)):
    uid = parse_id(user_id, NOT_FOUND)
    with internal_error("Failed to retrieve user"):
        return get_or_404(storage.get_user(uid), NOT_FOUND)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(data: UserCreate, storage: Storage = Depends(get_storage)):
    with internal_error("Failed to create user"):
        return storage.create_user(data)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, data: UserUpdate, storage: Storage = Depends(get_storage)):
    uid = parse_id(user_id, NOT_FOUND)
    with internal_error("Failed to update user"):
        return get_or_404(storage.update_user(uid, data), NOT_FOUND)


@router.delete("/{user_id}", status_code=204)
def delete_user(user_id: str, storage: Storage = Depends(get_storage)):
    uid = parse_id(user_id, NOT_FOUND)
    with internal_error("Failed to delete user"):
        deleted = storage.delete_user(uid)
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
