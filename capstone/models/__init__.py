from .faculty import Faculty
from .panel import Panel
from .project import Project
from .student import Student
from .review import ReviewRecord
from .request import EditRequest
from .system_config import SystemConfig

__all__ = [
    'Faculty', 'Panel', 'Project', 'Student',
    'ReviewRecord', 'EditRequest', 'SystemConfig'
]
