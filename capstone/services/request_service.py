from datetime import datetime
from typing import Dict, Optional
from capstone.database import get_db
from capstone.models import EditRequest, Faculty, Student
from capstone.models.request import RequestStatus
from capstone.services.lock_service import NONE_STATUS
from capstone.utils.errors import ServiceError, ValidationError, NotFoundError, InternalError
from capstone.utils.validators import parse_faculty_type, parse_review_type
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


def serialize_request(request: EditRequest) -> Dict:
    return {
        'id': request.id,
        'faculty_type': request.faculty_type.value,
        'review_type': request.review_type.value,
        'student_id': request.student_id,
        'faculty_id': request.faculty_id,
        'reason': request.reason,
        'status': request.status.value,
        'created_at': request.created_at.isoformat() if request.created_at else None,
        'resolved_at': request.resolved_at.isoformat() if request.resolved_at else None
    }


def derived_approval(status: RequestStatus) -> Optional[bool]:
    """Display flag: True approved, False rejected, None pending"""
    if status == RequestStatus.APPROVED:
        return True
    if status == RequestStatus.REJECTED:
        return False
    return None


class RequestService:
    """Service for the edit request ledger"""

    def create_request(self, faculty_type, data: Dict, now: datetime = None) -> Dict:
        """Record a request to reopen editing for a student's review.

        Duplicate pending requests are allowed; de-duplication is left to
        callers.
        """
        try:
            faculty_type = parse_faculty_type(faculty_type)
            review_type = parse_review_type(data.get('reviewType'), faculty_type)

            reason = data.get('reason')
            if not isinstance(reason, str) or not reason.strip():
                raise ValidationError('A reason is required to request edit access')
            reason = reason.strip()

            with get_db() as db:
                faculty = db.query(Faculty).filter_by(employee_id=data.get('employeeId')).first()
                if not faculty:
                    raise NotFoundError('Faculty not found')

                student = db.query(Student).filter_by(reg_no=data.get('regNo')).first()
                if not student:
                    raise NotFoundError('Student not found')

                request = EditRequest(
                    faculty_type=faculty_type,
                    review_type=review_type,
                    student_id=student.id,
                    faculty_id=faculty.id,
                    reason=reason,
                    status=RequestStatus.PENDING
                )
                if now:
                    request.created_at = now
                db.add(request)
                db.flush()

                logger.info(
                    f"Edit request {request.id} created by {faculty.employee_id} "
                    f"for {student.reg_no} {review_type.value}"
                )

                return {
                    'success': True,
                    'message': 'Request submitted successfully',
                    'data': serialize_request(request)
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error creating edit request: {str(e)}")
            return InternalError('Failed to create request').to_result()

    def query_status(self, faculty_type, reg_no: str, review_type) -> Dict:
        """Status of the most relevant request for a student and review type"""
        try:
            faculty_type = parse_faculty_type(faculty_type)
            review_type = parse_review_type(review_type, faculty_type)

            with get_db() as db:
                student = db.query(Student).filter_by(reg_no=reg_no).first()
                if not student:
                    raise NotFoundError('Student not found')

                return {'success': True, **self._status_for(db, faculty_type, student.id, review_type)}

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error checking request status: {str(e)}")
            return InternalError('Failed to check request status').to_result()

    def status_for_student(self, db, faculty_type, student_id: int, review_type) -> str:
        return self._status_for(db, faculty_type, student_id, review_type)['status']

    def _status_for(self, db, faculty_type, student_id, review_type) -> Dict:
        requests = db.query(EditRequest).filter(
            EditRequest.faculty_type == faculty_type,
            EditRequest.student_id == student_id,
            EditRequest.review_type == review_type
        ).order_by(EditRequest.created_at, EditRequest.id).all()

        if not requests:
            return {'status': NONE_STATUS}

        pending = [r for r in requests if r.status == RequestStatus.PENDING]
        latest = pending[-1] if pending else requests[-1]

        return {
            'status': latest.status.value,
            'request_id': latest.id,
            'created_at': latest.created_at.isoformat(),
            'resolved_at': latest.resolved_at.isoformat() if latest.resolved_at else None
        }

    def list_pending(self, faculty_type) -> Dict:
        """Unresolved requests for a faculty type, grouped by requesting faculty"""
        try:
            faculty_type = parse_faculty_type(faculty_type)

            with get_db() as db:
                requests = db.query(EditRequest).filter(
                    EditRequest.faculty_type == faculty_type,
                    EditRequest.resolved_at.is_(None)
                ).order_by(EditRequest.id).all()

                grouped = {}
                for request in requests:
                    faculty = request.faculty
                    if faculty.id not in grouped:
                        grouped[faculty.id] = {
                            'faculty_id': faculty.id,
                            'name': faculty.name,
                            'employee_id': faculty.employee_id,
                            'students': []
                        }

                    student = request.student
                    grouped[faculty.id]['students'].append({
                        'request_id': request.id,
                        'name': student.name if student else None,
                        'reg_no': student.reg_no if student else None,
                        'review_type': request.review_type.value,
                        'comments': request.reason,
                        'approved': derived_approval(request.status)
                    })

                return {
                    'success': True,
                    'message': 'Operation successful',
                    'data': list(grouped.values())
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error listing requests: {str(e)}")
            return InternalError('Failed to list requests').to_result()
