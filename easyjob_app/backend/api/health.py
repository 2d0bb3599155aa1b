"""
Health check and system status API endpoints.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter

from ..config.settings import get_settings

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


def health_payload() -> Dict[str, Any]:
    return {
        "status": "ok",
        "message": f"{settings.app_name} v{settings.app_version} is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health", summary="Health Check")
def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    """
    return health_payload()


@router.get("/health/detailed", summary="Detailed Health Check")
def detailed_health_check() -> Dict[str, Any]:
    """
    Detailed health check with configuration status. No secrets are returned.
    """
    health_status = {
        **health_payload(),
        "app_info": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "debug": settings.debug,
        },
        "configuration": {
            "log_level": settings.log_level,
            "database_type": settings.database_url.split(":", 1)[0],
            "cors_enabled": settings.cors_enabled,
            "api_docs_enabled": settings.api_docs_enabled,
            "llm_model": settings.llm_model,
            "llm_configured": bool(settings.google_api_key),
        },
    }

    config_issues = settings.validate_required_settings()
    if config_issues:
        health_status["status"] = "degraded"
        health_status["configuration_issues"] = config_issues
        logger.warning("Configuration issues found: %s", config_issues)

    return health_status
