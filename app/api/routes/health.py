from fastapi import APIRouter, Depends

from app.api.deps import get_app_settings, get_backend
from app.core.backend import backend_mode
from app.core.config import Settings

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get("")
def health(
    settings: Settings = Depends(get_app_settings),
    backend=Depends(get_backend),
):
    return {
        "status": "ok",
        "mail_provider": settings.MAIL_PROVIDER,
        "backend": backend_mode(backend),
    }
