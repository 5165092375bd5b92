"""User CRUD: /users (collection) and /user?id= (single record).

Handlers are plain ``def`` so FastAPI runs them on its worker threads;
the store lock is the only point where they serialize.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import JSONResponse

from api.deps import delete_target, get_user_service, require_id
from repositories import PersistenceError
from schemas.requests import UserPayload
from services import UserService
from store import RecordNotFound

logger = logging.getLogger(__name__)
router = APIRouter(tags=["users"])

Service = Annotated[UserService, Depends(get_user_service)]


@router.get("/users")
def list_users(service: Service):
    return JSONResponse([u.to_dict() for u in service.list_users()])


@router.post("/users")
def create_user(body: UserPayload, service: Service):
    try:
        user = service.create_user(body.name, body.age)
    except PersistenceError as e:
        raise HTTPException(500, f"Failed to create user: {e}") from e
    return JSONResponse(user.to_dict(), status_code=201)


@router.get("/user")
def get_user(user_id: Annotated[int, Depends(require_id)], service: Service):
    try:
        user = service.get_user(user_id)
    except RecordNotFound:
        raise HTTPException(404, "User not found")
    return JSONResponse(user.to_dict())


@router.put("/user")
def update_user(
    body: UserPayload,
    user_id: Annotated[int, Depends(require_id)],
    service: Service,
):
    try:
        user = service.update_user(user_id, body.name, body.age)
    except RecordNotFound:
        raise HTTPException(404, "User not found")
    except PersistenceError as e:
        raise HTTPException(500, f"Failed to update user: {e}") from e
    return JSONResponse(user.to_dict())


@router.delete("/user", status_code=204)
def delete_user(user_id: Annotated[int, Depends(delete_target)], service: Service):
    """Delete by ``?id=`` or, when no query id is given, by a JSON body ``{"id": n}``."""
    try:
        service.delete_user(user_id)
    except RecordNotFound:
        raise HTTPException(404, "User not found")
    except PersistenceError as e:
        raise HTTPException(500, f"Failed to delete user: {e}") from e
    return Response(status_code=204)
