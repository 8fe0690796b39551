from datetime import datetime
from typing import Dict
from capstone.database import get_db
from capstone.models import EditRequest
from capstone.models.request import RequestStatus
from capstone.services.deadline_service import load_default_deadlines
from capstone.services.request_service import serialize_request
from capstone.utils.deadlines import DeadlineWindow, is_complete_range, copy_deadlines, parse_timestamp
from capstone.utils.errors import (
    ServiceError, ValidationError, NotFoundError, ConflictError,
    ConfigurationError, InternalError
)
from capstone.utils.logger import get_logger

logger = get_logger(__name__)

RESOLUTIONS = {
    'approved': RequestStatus.APPROVED,
    'rejected': RequestStatus.REJECTED
}


class ApprovalService:
    """Service resolving edit requests.

    pending -> approved | rejected, both terminal. Approving reopens the
    student's window for the request's review type from now until the new
    deadline.
    """

    def resolve_request(self, request_id: int, status: str, new_deadline=None, now: datetime = None) -> Dict:
        """Approve or reject a pending request"""
        try:
            if status not in RESOLUTIONS:
                raise ValidationError("Invalid status value. Must be 'approved' or 'rejected'.")
            resolution = RESOLUTIONS[status]

            now = now or datetime.utcnow()

            deadline = None
            if resolution == RequestStatus.APPROVED:
                if not new_deadline:
                    raise ValidationError('newDeadline is required for approved requests.')
                try:
                    deadline = parse_timestamp(new_deadline)
                except ValueError:
                    raise ValidationError('Invalid date format for newDeadline.')
                # The reopened window runs from now, so it cannot end before it
                if deadline < now:
                    raise ValidationError('newDeadline must not be in the past.')

            # Student and request are written in one transaction; the student
            # is flushed first.
            with get_db() as db:
                request = db.query(EditRequest).filter_by(id=request_id).first()
                if not request:
                    raise NotFoundError('Request not found!')

                if request.is_resolved:
                    raise ConflictError(f"Request already {request.status.value}")

                student = request.student
                if not student:
                    raise NotFoundError('No student mapped to the request.')

                if resolution == RequestStatus.APPROVED:
                    self._reopen_window(db, request, student, deadline, now)

                request.status = resolution
                request.resolved_at = now
                db.flush()

                logger.info(f"Request {request.id} {resolution.value}")

                return {
                    'success': True,
                    'message': f"Request {resolution.value} successfully.",
                    'data': serialize_request(request)
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error resolving request {request_id}: {str(e)}")
            return InternalError('Failed to update request status').to_result()

    def _reopen_window(self, db, request, student, deadline: datetime, now: datetime):
        review_type = request.review_type
        key = review_type.value

        record = student.review_record(review_type)
        if record is not None:
            record.locked = False
        else:
            logger.warning(
                f"Review type {key} not found on student {student.id} for request {request.id}"
            )

        deadlines = copy_deadlines(student.deadline)
        if not is_complete_range(deadlines.get(key)):
            defaults = load_default_deadlines(db)
            if defaults is None:
                raise ConfigurationError('SystemConfig with defaultDeadlines not found.')
            deadlines = copy_deadlines(defaults)

        deadlines[key] = DeadlineWindow.range(now, deadline).to_json()
        student.deadline = deadlines
        db.flush()
