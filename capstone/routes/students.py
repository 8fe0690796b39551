from flask import Blueprint, request
from capstone.middleware.auth import require_auth, require_faculty
from capstone.routes.common import respond
from capstone.services.request_service import RequestService
from capstone.utils.logger import get_logger

bp = Blueprint('students', __name__)
logger = get_logger(__name__)
request_service = RequestService()


@bp.route('/<faculty_type>/requests', methods=['POST'])
@require_auth
@require_faculty
def request_edit_access(current_user, faculty_type):
    """Ask an admin to reopen a student's review after the deadline"""
    data = request.get_json() or {}
    data.setdefault('employeeId', current_user.get('employee_id'))
    return respond(request_service.create_request(faculty_type, data), 201)


@bp.route('/<faculty_type>/requests/status', methods=['GET'])
@require_auth
@require_faculty
def check_request_status(current_user, faculty_type):
    """Status of the latest relevant request for a student and review type"""
    result = request_service.query_status(
        faculty_type, request.args.get('regNo'), request.args.get('reviewType')
    )
    return respond(result)
