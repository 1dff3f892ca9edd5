from typing import Any, Dict, Optional
import logging
import traceback

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pharmacy_pos.models.error_log import ErrorLog

logger = logging.getLogger(__name__)


def log_error(
    db: Session,
    *,
    description: Optional[str] = None,
    error_code: Optional[str] = None,
    endpoint: Optional[str] = None,
    module: Optional[str] = None,
    function: Optional[str] = None,
    http_status: Optional[int] = None,
    user_id: Optional[int] = None,
    request_payload: Optional[Dict[str, Any]] = None,
    details: Optional[Dict[str, Any]] = None,
    stack_trace: Optional[str] = None,
) -> None:
    """
    Persist a failure into error_logs.
    Safe: wraps commit errors.
    """
    try:
        db.add(
            ErrorLog(
                description=description,
                error_code=error_code,
                endpoint=endpoint,
                module=module,
                function=function,
                http_status=http_status,
                user_id=user_id,
                request_payload=request_payload,
                details=details,
                stack_trace=stack_trace,
            ))
        db.commit()
    except SQLAlchemyError:
        # last resort – never raise from logger
        db.rollback()
        logger.exception("Failed to persist error log: %s", description)


def format_exception(exc: Exception) -> str:
    return "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__))
