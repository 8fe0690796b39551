from flask import Blueprint, request
from capstone.middleware.auth import require_auth, require_faculty
from capstone.routes.common import respond
from capstone.services.deadline_service import DeadlineService
from capstone.services.faculty_service import FacultyService
from capstone.services.review_service import ReviewService
from capstone.utils.logger import get_logger

bp = Blueprint('faculty', __name__)
logger = get_logger(__name__)

deadline_service = DeadlineService()
faculty_service = FacultyService()
review_service = ReviewService()


@bp.route('/profile/<employee_id>', methods=['GET'])
@require_auth
@require_faculty
def get_faculty_details(current_user, employee_id):
    """Faculty profile by employee id"""
    return respond(faculty_service.get_faculty_details(employee_id))


@bp.route('/deadlines', methods=['GET'])
@require_auth
@require_faculty
def get_default_deadlines(current_user):
    """Default deadline windows, read-only for faculty"""
    return respond(deadline_service.get_default_deadlines())


@bp.route('/projects/<int:project_id>/<faculty_type>/state', methods=['GET'])
@require_auth
@require_faculty
def get_review_state(current_user, project_id, faculty_type):
    """Lock and request state of a team's reviews"""
    return respond(review_service.team_review_state(project_id, faculty_type))


@bp.route('/projects/<int:project_id>/reviews', methods=['PUT'])
@require_auth
@require_faculty
def submit_review(current_user, project_id):
    """Submit guide or panel review data for a team"""
    data = request.get_json() or {}
    result = review_service.submit_review(
        project_id,
        data.get('reviewType'),
        current_user.get('employee_id'),
        data.get('studentUpdates')
    )
    return respond(result)
