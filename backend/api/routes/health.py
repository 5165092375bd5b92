from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from api.deps import get_user_service
from services import UserService

router = APIRouter(tags=["health"])


@router.get("/health")
def health(request: Request, service: UserService = Depends(get_user_service)):
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": request.app.version,
        "mirror": service.mirror_kind,
        "users": len(service.store),
    }
