"""FastAPI dependencies and require-helpers for routes."""

from typing import Optional

from fastapi import HTTPException, Request
from pydantic import ValidationError

from api.helpers import parse_id
from schemas.requests import UserRef
from services import UserService


def get_user_service(request: Request) -> UserService:
    """Return the app's UserService (built at startup). Use in Depends()."""
    return request.app.state.users


def require_id(id: Optional[str] = None) -> int:
    """Parse the ``?id=`` query parameter or raise 400."""
    user_id = parse_id(id)
    if user_id is None:
        raise HTTPException(400, "Invalid ID")
    return user_id


async def delete_target(request: Request, id: Optional[str] = None) -> int:
    """Id for DELETE: the query parameter when given, else a JSON body ``{"id": n}``.

    The body is only read when there is no query id.
    """
    if id is not None:
        return require_id(id)
    raw = await request.body()
    if not raw:
        raise HTTPException(400, "Invalid request payload")
    try:
        return UserRef.model_validate_json(raw).id
    except ValidationError:
        raise HTTPException(400, "Invalid request payload")
