"""
Database logging for order audit entries and unhandled errors
"""
from sqlalchemy.orm import Session
from models.log import ErrorLog, ActivityLog
from utils.sanitizer import DataSanitizer
from typing import Optional, Dict, Any
import database
import json
import logging

logger = logging.getLogger(__name__)

class DatabaseLogger:
    """Writes sanitized log rows next to the application data"""

    @staticmethod
    def log_activity(
        db: Session,
        action: str,
        user_id: Optional[int] = None,
        description: Optional[str] = None,
        entity_type: Optional[str] = None,
        entity_id: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ) -> ActivityLog:
        """Stage an audit entry; it commits or rolls back with the caller's mutation"""
        text = DataSanitizer.sanitize_string(description) if description else None
        if details:
            suffix = json.dumps(DataSanitizer.sanitize_dict(details), default=str)
            text = f"{text} {suffix}" if text else suffix

        entry = ActivityLog(
            user_id=user_id,
            action=action,
            description=text,
            entity_type=entity_type,
            entity_id=entity_id
        )
        db.add(entry)
        return entry

    @staticmethod
    def log_error(
        error_type: str,
        error_message: str,
        stack_trace: Optional[str] = None,
        endpoint: Optional[str] = None
    ):
        """Record an unhandled error in its own session"""
        db = database.SessionLocal()
        try:
            db.add(ErrorLog(
                error_type=error_type,
                error_message=DataSanitizer.sanitize_string(error_message) or "",
                stack_trace=stack_trace,
                endpoint=endpoint
            ))
            db.commit()
        except Exception as e:
            # Never replace the exception being handled
            logger.error(f"Failed to write error log: {e}")
            db.rollback()
        finally:
            db.close()
