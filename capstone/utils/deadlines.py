"""
Deadline windows for review types.

A stored window is one of three shapes:

* absent / ``None`` -- no restriction (open),
* an ISO timestamp string -- legacy single cutoff (point form),
* ``{"from": iso, "to": iso}`` -- an edit window (range form).

``DeadlineWindow.from_json`` resolves the shape once so evaluators never
inspect raw stored values.
"""

import copy
import enum
from datetime import datetime, date, timezone
from typing import Dict, Optional, Union


class WindowKind(enum.Enum):
    OPEN = "open"
    POINT = "point"
    RANGE = "range"


def parse_timestamp(value: Union[str, datetime, date]) -> datetime:
    """Parse an ISO string or date into a naive UTC datetime.

    Raises ValueError for anything that is not a valid timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


class DeadlineWindow:
    """A resolved deadline window"""

    def __init__(self, kind: WindowKind, start: Optional[datetime] = None, end: Optional[datetime] = None):
        self.kind = kind
        self.start = start
        self.end = end

    @classmethod
    def open(cls) -> 'DeadlineWindow':
        return cls(WindowKind.OPEN)

    @classmethod
    def point(cls, end) -> 'DeadlineWindow':
        return cls(WindowKind.POINT, end=parse_timestamp(end))

    @classmethod
    def range(cls, start, end) -> 'DeadlineWindow':
        start, end = parse_timestamp(start), parse_timestamp(end)
        if start > end:
            raise ValueError("Deadline window 'from' must not be after 'to'")
        return cls(WindowKind.RANGE, start=start, end=end)

    @classmethod
    def from_json(cls, raw) -> 'DeadlineWindow':
        """Resolve a stored window value.

        A dict missing either bound falls back to point form on ``to`` when
        present, otherwise the window is open.
        """
        if raw is None or raw == '' or raw == {}:
            return cls.open()
        if isinstance(raw, (str, datetime, date)):
            return cls.point(raw)
        if isinstance(raw, dict):
            start, end = raw.get('from'), raw.get('to')
            if start and end:
                return cls.range(start, end)
            if end:
                return cls.point(end)
            return cls.open()
        raise ValueError(f"Unsupported deadline window: {raw!r}")

    @property
    def is_open(self) -> bool:
        return self.kind == WindowKind.OPEN

    @property
    def is_range(self) -> bool:
        return self.kind == WindowKind.RANGE

    def has_passed(self, now: datetime) -> bool:
        """True when edits are not permitted at ``now``"""
        if self.kind == WindowKind.RANGE:
            return now < self.start or now > self.end
        if self.kind == WindowKind.POINT:
            return now > self.end
        return False

    def to_json(self):
        if self.kind == WindowKind.RANGE:
            return {'from': self.start.isoformat(), 'to': self.end.isoformat()}
        if self.kind == WindowKind.POINT:
            return self.end.isoformat()
        return None

    def __eq__(self, other):
        if not isinstance(other, DeadlineWindow):
            return NotImplemented
        return (self.kind, self.start, self.end) == (other.kind, other.start, other.end)

    def __repr__(self):
        return f"DeadlineWindow({self.kind.value}, start={self.start}, end={self.end})"


def is_complete_range(raw) -> bool:
    """True when a stored value carries both 'from' and 'to'"""
    return isinstance(raw, dict) and bool(raw.get('from')) and bool(raw.get('to'))


def copy_deadlines(deadlines: Optional[Dict]) -> Dict:
    """Deep copy of a stored deadline map, so JSON columns never share state"""
    return copy.deepcopy(deadlines) if deadlines else {}
