"""
Common API utilities and helper functions to reduce code redundancy across API modules.
"""
import logging
import traceback
from typing import Any, Dict, Optional

from fastapi import HTTPException, status

from ..config.settings import get_settings
from ..services.cv_extraction_service import CVExtractionError
from ..services.llm_service import LLMError

logger = logging.getLogger(__name__)


def success_response(data: Any = None) -> Dict[str, Any]:
    """Wraps a payload in the ``{success, data}`` envelope."""
    return {"success": True, "data": data}


def validate_non_empty_string(value: Optional[str], message: str) -> None:
    """
    Validates that a string field is not None or empty.

    Args:
        value: The string value to validate
        message: Error message returned to the client

    Raises:
        HTTPException: If value is None or empty
    """
    if not value or not value.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=message
        )


def handle_service_error(error: Exception, service_name: str) -> HTTPException:
    """
    Standardized error handling for service layer exceptions.

    Args:
        error: The exception that occurred
        service_name: Name of the service for logging/error messages

    Returns:
        HTTPException with appropriate status code and message
    """
    error_msg = str(error)
    logger.error("%s service error (%s): %s", service_name, type(error).__name__, error_msg)

    if isinstance(error, ValueError):
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_msg
        )

    if isinstance(error, (LLMError, CVExtractionError)):
        message = error_msg
    else:
        logger.exception("Unexpected error in %s", service_name, exc_info=error)
        message = f"An unexpected error occurred in {service_name}"

    settings = get_settings()
    if settings.expose_error_details():
        detail = {
            "error": message,
            "details": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
        }
    else:
        detail = message
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=detail
    )


def check_resource_exists(resource: Optional[object], message: str) -> None:
    """
    Raises a 404 when a looked-up resource is missing.

    Args:
        resource: The resource to check
        message: Error message returned to the client

    Raises:
        HTTPException: If resource is None
    """
    if resource is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=message
        )
