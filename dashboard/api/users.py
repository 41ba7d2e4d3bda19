"""
Users JSON API endpoints.

List (with the dashboard's search/filter/sort/paging parameters), stats,
roles, detail, create, update and delete.
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from dashboard.db import schemas
from dashboard.db.database import get_db
from dashboard.services import user_actions, user_queries

router = APIRouter(prefix="/api/users", tags=["users"])

_ERROR_STATUS = {
    "validation": 422,
    "duplicate_email": status.HTTP_409_CONFLICT,
    "not_found": status.HTTP_404_NOT_FOUND,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _raise_for_result(result: schemas.ActionResult) -> None:
    if result.success:
        return
    code = _ERROR_STATUS.get(result.error_type or "internal", status.HTTP_500_INTERNAL_SERVER_ERROR)
    detail = {"error": result.error, "error_type": result.error_type}
    if result.errors:
        detail["errors"] = result.errors
    raise HTTPException(status_code=code, detail=detail)


@router.get("", response_model=schemas.UsersResponse)
def list_users_endpoint(request: Request, db: Session = Depends(get_db)):
    return user_queries.get_users(db, request.query_params)


@router.get("/stats", response_model=schemas.UserStats)
def user_stats_endpoint(db: Session = Depends(get_db)):
    return user_queries.get_user_stats(db)


@router.get("/roles", response_model=List[str])
def user_roles_endpoint(db: Session = Depends(get_db)):
    return user_queries.get_user_roles(db)


@router.get("/{user_id}", response_model=schemas.User)
def get_user_endpoint(user_id: str, db: Session = Depends(get_db)):
    user = user_queries.get_user_by_id(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.post("", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
def create_user_endpoint(payload: schemas.UserCreate, db: Session = Depends(get_db)):
    result = user_actions.create_user(db, payload)
    _raise_for_result(result)
    return user_queries.get_user_by_id(db, result.data)


@router.patch("/{user_id}", response_model=schemas.User)
def update_user_endpoint(user_id: str, payload: schemas.UserUpdate, db: Session = Depends(get_db)):
    result = user_actions.update_user(db, user_id, payload)
    _raise_for_result(result)
    return user_queries.get_user_by_id(db, user_id)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_endpoint(user_id: str, db: Session = Depends(get_db)):
    result = user_actions.delete_user(db, user_id)
    _raise_for_result(result)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
