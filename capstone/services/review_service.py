from datetime import datetime
from typing import Dict, List
from capstone.database import get_db
from capstone.models import Faculty, Project, ReviewRecord
from capstone.models.review import FacultyType, REVIEW_TYPES, faculty_type_for
from capstone.services import lock_service
from capstone.services.deadline_service import load_default_deadlines
from capstone.services.request_service import RequestService
from capstone.utils.deadlines import DeadlineWindow
from capstone.utils.errors import (
    ServiceError, ValidationError, NotFoundError, ConflictError, InternalError
)
from capstone.utils.validators import parse_faculty_type, parse_review_type
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


class ReviewService:
    """Service for guide and panel review submissions"""

    def __init__(self):
        self.request_service = RequestService()

    def submit_review(self, project_id: int, review_type, employee_id: str,
                      student_updates: List[Dict], now: datetime = None) -> Dict:
        """Store review data for the students of a project.

        Updates for students whose record is locked are skipped and reported;
        submitting never changes a lock flag.
        """
        try:
            review_type = parse_review_type(review_type)
            faculty_type = faculty_type_for(review_type)
            now = now or datetime.utcnow()

            if not isinstance(student_updates, list) or not student_updates:
                raise ValidationError('studentUpdates must be a non-empty list')
            for update in student_updates:
                if not isinstance(update, dict) or not isinstance(update.get('data') or {}, dict):
                    raise ValidationError("Each student update needs a regNo and a data object")

            with get_db() as db:
                faculty = db.query(Faculty).filter_by(employee_id=employee_id).first()
                if not faculty:
                    raise NotFoundError('Faculty not found')

                project = db.query(Project).filter_by(id=project_id).first()
                if not project:
                    raise NotFoundError('Project not found')

                self._check_reviewer(project, faculty, faculty_type)

                students = {s.reg_no: s for s in project.students}
                defaults = load_default_deadlines(db)

                updated, locked = [], []
                for update in student_updates:
                    reg_no = update.get('regNo')
                    student = students.get(reg_no)
                    if student is None:
                        raise ValidationError(f"Student {reg_no} is not part of this project")

                    if lock_service.is_locked(student, review_type, defaults, now):
                        locked.append(reg_no)
                        continue

                    record = student.review_record(review_type)
                    if record is None:
                        record = ReviewRecord(review_type=review_type, locked=False)
                        student.reviews.append(record)
                    record.data = dict(update.get('data') or {})
                    updated.append(reg_no)

                db.flush()

                if locked:
                    logger.warning(
                        f"Skipped locked {review_type.value} records for {', '.join(locked)} "
                        f"on project {project.id}"
                    )
                logger.info(f"{faculty.employee_id} submitted {review_type.value} for project {project.id}")

                return {
                    'success': True,
                    'message': 'Review submitted successfully',
                    'updated': updated,
                    'locked': locked
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error submitting review for project {project_id}: {str(e)}")
            return InternalError('Failed to submit review').to_result()

    def team_review_state(self, project_id: int, faculty_type, now: datetime = None) -> Dict:
        """Lock and request state of every review type a faculty type handles"""
        try:
            faculty_type = parse_faculty_type(faculty_type)
            now = now or datetime.utcnow()

            with get_db() as db:
                project = db.query(Project).filter_by(id=project_id).first()
                if not project:
                    raise NotFoundError('Project not found')

                defaults = load_default_deadlines(db)
                students = list(project.students)

                reviews = {}
                for review_type in REVIEW_TYPES[faculty_type]:
                    locks = lock_service.lock_states(students, review_type, defaults, now)
                    statuses = {
                        s.reg_no: self.request_service.status_for_student(db, faculty_type, s.id, review_type)
                        for s in students
                    }

                    default_window = DeadlineWindow.from_json((defaults or {}).get(review_type.value))
                    team_status = lock_service.team_request_status(
                        list(statuses.values()),
                        lock_service.is_deadline_passed(default_window, now)
                    )

                    reviews[review_type.value] = {
                        'locks': locks,
                        'request_statuses': statuses,
                        'team_status': team_status,
                        'actionable': lock_service.is_team_actionable(locks),
                        'locked': lock_service.is_team_locked(locks),
                        'request_edit_visible': lock_service.can_request_edit(locks, team_status)
                    }

                return {
                    'success': True,
                    'data': {
                        'project_id': project.id,
                        'faculty_type': faculty_type.value,
                        'reviews': reviews
                    }
                }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error getting review state for project {project_id}: {str(e)}")
            return InternalError('Failed to get review state').to_result()

    def _check_reviewer(self, project: Project, faculty: Faculty, faculty_type: FacultyType):
        if faculty_type == FacultyType.GUIDE:
            if project.guide_faculty_id != faculty.id:
                raise ConflictError('Only the guide can submit guide reviews for this project')
        elif project.panel is None or not project.panel.has_member(faculty.id):
            raise ConflictError('Only panel members can submit panel reviews for this project')
