from flask import Blueprint, request, jsonify
from capstone.middleware.auth import require_auth, require_admin
from capstone.models.faculty import FacultyRole
from capstone.routes.common import respond
from capstone.services.approval_service import ApprovalService
from capstone.services.deadline_service import DeadlineService
from capstone.services.faculty_service import FacultyService
from capstone.services.panel_service import PanelService
from capstone.services.request_service import RequestService
from capstone.utils.validators import parse_faculty_type
from capstone.utils.errors import ValidationError
from capstone.utils.logger import get_logger

bp = Blueprint('admin', __name__)
logger = get_logger(__name__)

deadline_service = DeadlineService()
request_service = RequestService()
approval_service = ApprovalService()
panel_service = PanelService()
faculty_service = FacultyService()


@bp.route('/faculty', methods=['POST'])
@require_auth
@require_admin
def create_faculty(current_user):
    """Register a faculty member"""
    result = faculty_service.create_faculty(request.get_json() or {}, FacultyRole.FACULTY)
    return respond(result, 201)


@bp.route('/admins', methods=['POST'])
@require_auth
@require_admin
def create_admin(current_user):
    """Register an admin"""
    result = faculty_service.create_faculty(request.get_json() or {}, FacultyRole.ADMIN)
    return respond(result, 201)


@bp.route('/deadlines', methods=['GET'])
@require_auth
@require_admin
def get_default_deadlines(current_user):
    """Get the default deadline windows"""
    return respond(deadline_service.get_default_deadlines())


@bp.route('/deadlines', methods=['POST'])
@require_auth
@require_admin
def set_default_deadlines(current_user):
    """Merge default deadline windows for some review types"""
    data = request.get_json() or {}
    return respond(deadline_service.set_default_deadlines(data.get('defaultDeadline')))


@bp.route('/<faculty_type>/requests', methods=['GET'])
@require_auth
@require_admin
def get_pending_requests(current_user, faculty_type):
    """Unresolved edit requests grouped by faculty"""
    return respond(request_service.list_pending(faculty_type))


@bp.route('/<faculty_type>/requests/resolve', methods=['POST'])
@require_auth
@require_admin
def resolve_request(current_user, faculty_type):
    """Approve or reject an edit request"""
    try:
        parse_faculty_type(faculty_type)
    except ValidationError as e:
        return respond(e.to_result())

    data = request.get_json() or {}
    if not data.get('requestId'):
        return jsonify({'success': False, 'message': 'requestId is required', 'error_type': 'validation'}), 400

    result = approval_service.resolve_request(
        data['requestId'], data.get('status'), data.get('newDeadline')
    )
    return respond(result)


@bp.route('/panels', methods=['GET'])
@require_auth
@require_admin
def get_panels(current_user):
    """All panels with their projects"""
    return respond(panel_service.get_panels_with_projects())


@bp.route('/panels', methods=['POST'])
@require_auth
@require_admin
def create_panel(current_user):
    """Create a panel from two faculty"""
    data = request.get_json() or {}
    result = panel_service.create_panel(data.get('faculty1Id'), data.get('faculty2Id'))
    return respond(result, 201)


@bp.route('/panels/<int:panel_id>', methods=['DELETE'])
@require_auth
@require_admin
def delete_panel(current_user, panel_id):
    """Delete a panel, detaching it from projects"""
    return respond(panel_service.delete_panel(panel_id))


@bp.route('/panels/auto-create', methods=['POST'])
@require_auth
@require_admin
def auto_create_panels(current_user):
    """Pair the faculty pool into panels"""
    data = request.get_json() or {}
    return respond(panel_service.auto_create_panels(data.get('force', False)))


@bp.route('/panels/auto-assign', methods=['POST'])
@require_auth
@require_admin
def auto_assign_panels(current_user):
    """Assign panels to every project without one"""
    return respond(panel_service.auto_assign_panels_to_projects())


@bp.route('/panels/assign', methods=['POST'])
@require_auth
@require_admin
def assign_panel(current_user):
    """Create a new panel for a single project"""
    data = request.get_json() or {}
    result = panel_service.assign_panel_to_project(data.get('panelFacultyIds'), data.get('projectId'))
    return respond(result)


@bp.route('/panels/assign-existing', methods=['POST'])
@require_auth
@require_admin
def assign_existing_panel(current_user):
    """Assign or remove an existing panel on a project"""
    data = request.get_json() or {}
    result = panel_service.assign_existing_panel_to_project(data.get('panelId'), data.get('projectId'))
    return respond(result)
