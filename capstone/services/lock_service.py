"""
Lock evaluation for student review records.

Everything here is pure: callers pass the default deadline map (as stored in
SystemConfig.default_deadlines) and, optionally, the evaluation time.
Per-student results are the source of truth; the team helpers only feed
display flags and never authorize a submission.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Optional
from capstone.models import Student
from capstone.models.review import ReviewType
from capstone.models.request import RequestStatus
from capstone.utils.deadlines import DeadlineWindow, is_complete_range

NONE_STATUS = 'none'


def _key(review_type) -> str:
    return review_type.value if isinstance(review_type, ReviewType) else review_type


def resolve_window(student_deadlines: Optional[Dict], review_type, default_deadlines: Optional[Dict]) -> DeadlineWindow:
    """Effective window for one student and review type.

    The student's own window wins only when it is a complete range; anything
    else falls back to the default.
    """
    key = _key(review_type)
    own = (student_deadlines or {}).get(key)
    if is_complete_range(own):
        return DeadlineWindow.from_json(own)
    return DeadlineWindow.from_json((default_deadlines or {}).get(key))


def is_deadline_passed(window: DeadlineWindow, now: Optional[datetime] = None) -> bool:
    return window.has_passed(now or datetime.utcnow())


def is_locked(student: Student, review_type, default_deadlines: Optional[Dict],
              now: Optional[datetime] = None) -> bool:
    """Whether the student's review record for review_type is closed for edits"""
    record = student.review_record(review_type if isinstance(review_type, ReviewType) else ReviewType(review_type))
    if record is not None and record.locked:
        return True

    window = resolve_window(student.deadline, review_type, default_deadlines)
    return is_deadline_passed(window, now)


def lock_states(students: Iterable[Student], review_type, default_deadlines: Optional[Dict],
                now: Optional[datetime] = None) -> Dict[str, bool]:
    """Lock flag per student reg_no"""
    now = now or datetime.utcnow()
    return {s.reg_no: is_locked(s, review_type, default_deadlines, now) for s in students}


def is_team_actionable(locks: Dict[str, bool]) -> bool:
    """A review is actionable for a team if at least one member is unlocked"""
    return any(not locked for locked in locks.values())


def is_team_locked(locks: Dict[str, bool]) -> bool:
    """A team shows as locked once any member is locked"""
    return any(locks.values())


def team_request_status(statuses: List[str], deadline_passed: bool) -> str:
    """Combine member request statuses into one team status.

    A pending request beats everything, including an expired deadline.
    Without one, an expired deadline reads as 'none' (nothing requested for
    the current window), and only then does an approval show.
    """
    if RequestStatus.PENDING.value in statuses:
        return RequestStatus.PENDING.value

    if deadline_passed:
        return NONE_STATUS

    if RequestStatus.APPROVED.value in statuses:
        return RequestStatus.APPROVED.value

    return NONE_STATUS


def can_request_edit(locks: Dict[str, bool], team_status: str) -> bool:
    """The edit request control shows for a locked team with nothing outstanding"""
    return is_team_locked(locks) and team_status == NONE_STATUS
