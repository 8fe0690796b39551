import pytest
from datetime import datetime
from capstone.database import DatabaseManager, get_db
from capstone.models import EditRequest, ReviewRecord, Student
from capstone.models.request import RequestStatus
from capstone.models.review import ReviewType
from capstone.services.approval_service import ApprovalService
from capstone.services.deadline_service import DeadlineService
from capstone.services.request_service import RequestService

NOW = datetime(2025, 2, 1, 9, 30)

DEFAULTS = {
    'review0': '2025-01-10',
    'draftReview': {'from': '2025-01-05', 'to': '2025-01-20'},
    'review1': {'from': '2025-01-01', 'to': '2025-01-31'}
}


@pytest.fixture
def approval_setup(make_faculty, make_project):
    """A locked review1 record with a pending request against it"""
    guide = make_faculty('Guide')
    project, students = make_project(guide, ['21BCE0001'])
    student = students[0]

    DatabaseManager(ReviewRecord).create(
        student_id=student.id, review_type=ReviewType.REVIEW1, locked=True, data={'component1': 8}
    )

    created = RequestService().create_request('guide', {
        'employeeId': guide.employee_id,
        'regNo': student.reg_no,
        'reviewType': 'review1',
        'reason': 'Attendance sheet arrived late'
    })

    return {'guide': guide, 'student': student, 'request_id': created['data']['id']}


def update_row(model, row_id, **values):
    with get_db() as db:
        db.query(model).filter_by(id=row_id).update(values)


def stored_record(student_id):
    return DatabaseManager(ReviewRecord).get_by(student_id=student_id, review_type=ReviewType.REVIEW1)


class TestApproveRequest:
    """Test approving edit requests"""

    def test_approval_opens_window(self, approval_setup):
        DeadlineService().set_default_deadlines(DEFAULTS)

        result = ApprovalService().resolve_request(
            approval_setup['request_id'], 'approved', '2025-03-01', now=NOW
        )

        assert result['success'] is True
        assert result['data']['status'] == 'approved'

        student = DatabaseManager(Student).get_by(id=approval_setup['student'].id)
        assert student.deadline['review1'] == {'from': NOW.isoformat(), 'to': '2025-03-01T00:00:00'}
        assert stored_record(student.id).locked is False

        request = DatabaseManager(EditRequest).get_by(id=approval_setup['request_id'])
        assert request.status == RequestStatus.APPROVED
        assert request.resolved_at == NOW

    def test_seeds_other_review_types_from_defaults(self, approval_setup):
        DeadlineService().set_default_deadlines(DEFAULTS)

        ApprovalService().resolve_request(approval_setup['request_id'], 'approved', '2025-03-01', now=NOW)

        student = DatabaseManager(Student).get_by(id=approval_setup['student'].id)
        assert student.deadline['review0'] == '2025-01-10T00:00:00'
        assert student.deadline['draftReview'] == {'from': '2025-01-05T00:00:00', 'to': '2025-01-20T00:00:00'}

        # Defaults are copied, never modified
        defaults = DeadlineService().get_default_deadlines()['data']
        assert defaults['review1'] == {'from': '2025-01-01T00:00:00', 'to': '2025-01-31T00:00:00'}

    def test_keeps_existing_personal_windows(self, approval_setup):
        own = {'review1': {'from': '2025-01-01T00:00:00', 'to': '2025-01-15T00:00:00'}}
        update_row(Student, approval_setup['student'].id, deadline=own)

        result = ApprovalService().resolve_request(approval_setup['request_id'], 'approved', '2025-03-01', now=NOW)

        assert result['success'] is True
        student = DatabaseManager(Student).get_by(id=approval_setup['student'].id)
        assert set(student.deadline) == {'review1'}
        assert student.deadline['review1']['from'] == NOW.isoformat()

    def test_missing_default_config(self, approval_setup):
        result = ApprovalService().resolve_request(approval_setup['request_id'], 'approved', '2025-03-01', now=NOW)

        assert result['success'] is False
        assert result['error_type'] == 'configuration'

        request = DatabaseManager(EditRequest).get_by(id=approval_setup['request_id'])
        assert request.status == RequestStatus.PENDING
        assert stored_record(approval_setup['student'].id).locked is True

    def test_missing_review_record_still_approves(self, make_faculty, make_project):
        guide = make_faculty()
        _, students = make_project(guide, ['21BCE0100'])
        DeadlineService().set_default_deadlines(DEFAULTS)
        created = RequestService().create_request('guide', {
            'employeeId': guide.employee_id, 'regNo': '21BCE0100',
            'reviewType': 'review0', 'reason': 'Missed the review'
        })

        result = ApprovalService().resolve_request(created['data']['id'], 'approved', '2025-03-01', now=NOW)

        assert result['success'] is True
        student = DatabaseManager(Student).get_by(id=students[0].id)
        assert student.deadline['review0'] == {'from': NOW.isoformat(), 'to': '2025-03-01T00:00:00'}

    def test_deadline_before_now_rejected(self, approval_setup):
        DeadlineService().set_default_deadlines(DEFAULTS)

        result = ApprovalService().resolve_request(
            approval_setup['request_id'], 'approved', '2025-03-01', now=datetime(2025, 4, 1)
        )

        assert result['success'] is False
        assert result['error_type'] == 'validation'
        assert result['message'] == 'newDeadline must not be in the past.'

        request = DatabaseManager(EditRequest).get_by(id=approval_setup['request_id'])
        assert request.status == RequestStatus.PENDING
        student = DatabaseManager(Student).get_by(id=approval_setup['student'].id)
        assert student.deadline is None
        assert stored_record(student.id).locked is True

    def test_deadline_equal_to_now_allowed(self, approval_setup):
        DeadlineService().set_default_deadlines(DEFAULTS)
        now = datetime(2025, 3, 1)

        result = ApprovalService().resolve_request(approval_setup['request_id'], 'approved', '2025-03-01', now=now)

        assert result['success'] is True
        student = DatabaseManager(Student).get_by(id=approval_setup['student'].id)
        assert student.deadline['review1'] == {'from': now.isoformat(), 'to': now.isoformat()}

    def test_resolving_twice_fails(self, approval_setup):
        DeadlineService().set_default_deadlines(DEFAULTS)
        service = ApprovalService()
        service.resolve_request(approval_setup['request_id'], 'approved', '2025-03-01', now=NOW)

        result = service.resolve_request(
            approval_setup['request_id'], 'approved', '2025-04-01', now=datetime(2025, 2, 5)
        )

        assert result['success'] is False
        assert result['error_type'] == 'conflict'
        student = DatabaseManager(Student).get_by(id=approval_setup['student'].id)
        assert student.deadline['review1']['to'] == '2025-03-01T00:00:00'


class TestRejectRequest:
    """Test rejecting edit requests"""

    def test_rejection_leaves_student_alone(self, approval_setup):
        result = ApprovalService().resolve_request(approval_setup['request_id'], 'rejected', now=NOW)

        assert result['success'] is True
        request = DatabaseManager(EditRequest).get_by(id=approval_setup['request_id'])
        assert request.status == RequestStatus.REJECTED
        assert request.resolved_at == NOW

        student = DatabaseManager(Student).get_by(id=approval_setup['student'].id)
        assert student.deadline is None
        assert stored_record(student.id).locked is True

    def test_rejected_cannot_be_approved(self, approval_setup):
        service = ApprovalService()
        service.resolve_request(approval_setup['request_id'], 'rejected', now=NOW)
        result = service.resolve_request(approval_setup['request_id'], 'approved', '2025-03-01', now=NOW)
        assert result['error_type'] == 'conflict'


class TestResolveValidation:
    """Test input checks before any lookup"""

    @pytest.mark.parametrize('status', ['pending', 'ok', None])
    def test_invalid_status(self, approval_setup, status):
        result = ApprovalService().resolve_request(approval_setup['request_id'], status, '2025-03-01')
        assert result['error_type'] == 'validation'

    @pytest.mark.parametrize('deadline', [None, '', 'next tuesday'])
    def test_approval_needs_valid_deadline(self, approval_setup, deadline):
        result = ApprovalService().resolve_request(approval_setup['request_id'], 'approved', deadline)
        assert result['error_type'] == 'validation'

    def test_unknown_request(self, database):
        result = ApprovalService().resolve_request(999, 'rejected')
        assert result['error_type'] == 'not_found'
        assert result['message'] == 'Request not found!'

    def test_request_without_student(self, approval_setup):
        update_row(EditRequest, approval_setup['request_id'], student_id=None)
        result = ApprovalService().resolve_request(approval_setup['request_id'], 'rejected')
        assert result['error_type'] == 'not_found'
