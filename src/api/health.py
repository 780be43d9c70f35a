from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from src.core.config.settings import Settings, get_settings
from src.infra.monitoring import check_all_infrastructure
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/health/live")
async def health_live():
    """Process is up. Never touches settings or the upstream LLM."""
    return {"status": "ok"}


@router.get("/health/ready")
async def health_ready(
    response: Response, settings: Annotated[Settings, Depends(get_settings)]
):
    """
    Whether a search request could reach upstream right now.
    503 while neither DEEPSEEK_API_KEY nor API_KEY is set.
    """
    infra_status = check_all_infrastructure(settings)

    status_dict = {}
    all_healthy = True

    for comp, result in infra_status.items():
        if result is True:
            status_dict[comp] = "ok"
        else:
            status_dict[comp] = "error"
            all_healthy = False

    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return status_dict
