from typing import Dict, Optional
from capstone.database import get_db
from capstone.models import SystemConfig
from capstone.utils.deadlines import DeadlineWindow, copy_deadlines
from capstone.utils.errors import ServiceError, ValidationError, NotFoundError, InternalError
from capstone.utils.validators import parse_review_type
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


def load_default_deadlines(db) -> Optional[Dict]:
    """Stored default deadline map, or None if it was never set"""
    config = db.query(SystemConfig).order_by(SystemConfig.id).first()
    if not config:
        return None
    return copy_deadlines(config.default_deadlines)


class DeadlineService:
    """Service for the default deadline configuration"""

    def get_default_deadlines(self) -> Dict:
        """Get the default deadline windows"""
        try:
            with get_db() as db:
                deadlines = load_default_deadlines(db)
                if deadlines is None:
                    raise NotFoundError("No default deadlines set yet.")

                return {'success': True, 'data': deadlines}

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error getting default deadlines: {str(e)}")
            return InternalError('Failed to get default deadlines').to_result()

    def set_default_deadlines(self, default_deadlines: Dict) -> Dict:
        """Merge windows for some review types into the default configuration"""
        try:
            normalized = self._normalize(default_deadlines)

            with get_db() as db:
                config = db.query(SystemConfig).order_by(SystemConfig.id).first()
                if not config:
                    config = SystemConfig(default_deadlines={})
                    db.add(config)

                merged = copy_deadlines(config.default_deadlines)
                merged.update(normalized)
                config.default_deadlines = merged
                db.flush()

                logger.info(f"Default deadlines updated for {', '.join(sorted(normalized))}")

                return {
                    'success': True,
                    'message': 'Default Deadlines set successfully',
                    'data': copy_deadlines(merged)
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error setting default deadlines: {str(e)}")
            return InternalError('Failed to set default deadlines').to_result()

    def _normalize(self, default_deadlines) -> Dict:
        if not isinstance(default_deadlines, dict) or not default_deadlines:
            raise ValidationError('defaultDeadline must map review types to deadlines')

        normalized = {}
        for key, raw in default_deadlines.items():
            review_type = parse_review_type(key)
            try:
                window = DeadlineWindow.from_json(raw)
            except ValueError as e:
                raise ValidationError(f"Invalid deadline for {review_type.value}: {str(e)}")
            if window.is_open:
                raise ValidationError(f"Deadline for {review_type.value} needs a 'to' date")
            normalized[review_type.value] = window.to_json()

        return normalized
