# gsi_orders/api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from gsi_orders.api.deps import get_current_user_id
from gsi_orders.data.database import get_db
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import (
    UserRead,
    UserUpdateIn,
    UserProfileOut,
    CreateAdminIn,
    AdminUserOut,
)
from gsi_orders.services.user_service import UserService

router = APIRouter(tags=["users"])


@router.get("/user", response_model=UserProfileOut | UserRead)
def get_profile(
    include_stats: bool = Query(True),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return service.get_profile(user_id, include_stats)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.put("/user", response_model=UserRead)
def update_profile(
    payload: UserUpdateIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        return service.update_profile(user_id, payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.post("/create-admin", response_model=AdminUserOut, status_code=201)
def create_admin(payload: CreateAdminIn, response: Response, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        created, user = service.create_admin(payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())

    if not created:
        response.status_code = 200
        return {"success": True, "message": "User promoted to admin", "user": user}
    return {"success": True, "message": "Admin user created", "user": user}
