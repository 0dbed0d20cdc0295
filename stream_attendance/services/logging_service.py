from sqlalchemy.orm import Session
from typing import Optional, Dict, Any, List, Tuple

from stream_attendance.core.identity import UnverifiedIdentity, VerifiedIdentity
from stream_attendance.models.profile import Profile
from stream_attendance.models.system_log import SystemLog


class LoggingService:
    """Service for logging system activities"""

    @staticmethod
    def actor_fields(actor) -> Tuple[Optional[int], str, Optional[str]]:
        """(actor_id, actor_name, actor_email) for a profile or identity"""
        if isinstance(actor, Profile):
            return actor.id, actor.full_name, actor.email
        if isinstance(actor, VerifiedIdentity):
            return actor.profile.id, actor.display_name, actor.email
        if isinstance(actor, UnverifiedIdentity):
            return None, actor.display_name, actor.email
        raise TypeError(f"Unsupported actor type: {type(actor).__name__}")

    @staticmethod
    def log_activity(
        db: Session,
        actor,
        action: str,
        description: str,
        table_name: Optional[str] = None,
        record_id: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        ip_address: Optional[str] = None,
    ) -> SystemLog:
        """
        Log a system activity

        Args:
            db: Database session
            actor: Profile or identity that performed the action
            action: Action type (CHECK_IN, UPDATE, LOGIN, etc.)
            description: Human-readable description of the action
            table_name: Name of the table affected
            record_id: ID of the record affected
            details: Additional context as dictionary
            ip_address: IP address of the caller
        """
        actor_id, actor_name, actor_email = LoggingService.actor_fields(actor)

        log_entry = SystemLog(
            actor_id=actor_id,
            actor_name=actor_name,
            actor_email=actor_email,
            action=action.upper(),
            description=description,
            table_name=table_name,
            record_id=record_id,
            details=details,
            ip_address=ip_address,
        )

        db.add(log_entry)
        db.commit()
        db.refresh(log_entry)

        return log_entry

    @staticmethod
    def get_action_description(action: str, table_name: str) -> str:
        descriptions = {
            "CREATE": f"Created new {table_name}",
            "UPDATE": f"Updated {table_name}",
            "LOGIN": "Logged into the system",
            "LOGOUT": "Logged out of the system",
            "REGISTER": "Registered new account",
            "JOIN": "Joined the live service",
            "CHECK_IN": "Checked in to the live service",
            "DOWNLOAD": f"Downloaded {table_name}",
        }
        return descriptions.get(action.upper(), f"Performed {action.lower()} on {table_name}")

    @staticmethod
    def list_logs(
        db: Session,
        action: Optional[str] = None,
        skip: int = 0,
        limit: int = 50,
    ) -> Tuple[List[SystemLog], int]:
        query = db.query(SystemLog)
        if action:
            query = query.filter(SystemLog.action == action.upper())

        total = query.count()
        logs = (
            query.order_by(SystemLog.created_at.desc(), SystemLog.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return logs, total
