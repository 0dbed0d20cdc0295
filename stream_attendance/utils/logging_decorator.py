from functools import wraps
from typing import Optional, Callable
from sqlalchemy.orm import Session
from stream_attendance.core.identity import UnverifiedIdentity, VerifiedIdentity
from stream_attendance.models.profile import Profile
from stream_attendance.services.logging_service import LoggingService
import logging

logger = logging.getLogger(__name__)

_ACTOR_TYPES = (Profile, VerifiedIdentity, UnverifiedIdentity)


def _find_context(args, kwargs):
    db = None
    actor = None

    for arg in list(args) + list(kwargs.values()):
        if db is None and isinstance(arg, Session):
            db = arg
        elif actor is None and isinstance(arg, _ACTOR_TYPES):
            actor = arg

    return db, actor


def log_activity(
    action: str,
    description=None,
    table_name: Optional[str] = None,
    get_record_id: Optional[Callable] = None,
    get_details: Optional[Callable] = None,
):
    """
    Decorator to log activities in controller functions

    Args:
        action: Action type (CREATE, UPDATE, CHECK_IN, etc.)
        description: Custom description or callable(result, *args, **kwargs)
        table_name: Table affected
        get_record_id: Function to extract record ID from function result
        get_details: Function to extract additional details

    The wrapped function needs a Session and an actor (profile or identity)
    among its arguments. Failures while logging never affect the result.
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            result = func(*args, **kwargs)

            try:
                db, actor = _find_context(args, kwargs)
                if db is None or actor is None:
                    logger.debug(f"Skipping activity log for {func.__name__}: no session or actor")
                    return result

                final_description = description
                if callable(description):
                    final_description = description(result, *args, **kwargs)

                record_id = get_record_id(result, *args, **kwargs) if get_record_id else getattr(result, "id", None)
                details = get_details(result, *args, **kwargs) if get_details else None

                LoggingService.log_activity(
                    db=db,
                    actor=actor,
                    action=action,
                    description=final_description or LoggingService.get_action_description(action, table_name or "record"),
                    table_name=table_name,
                    record_id=record_id if isinstance(record_id, int) else None,
                    details=details,
                )
            except Exception as e:
                logger.warning(f"Failed to log activity for {func.__name__}: {e}")
                db_session = _find_context(args, kwargs)[0]
                if db_session is not None:
                    db_session.rollback()

            return result

        return wrapper

    return decorator


def log_create(table_name: str, description=None, **kwargs):
    return log_activity("CREATE", description=description, table_name=table_name, **kwargs)


def log_update(table_name: str, description=None, **kwargs):
    return log_activity("UPDATE", description=description, table_name=table_name, **kwargs)
