from typing import Dict
from capstone.database import DatabaseManager
from capstone.models import Faculty
from capstone.models.faculty import FacultyRole
from capstone.utils.errors import ServiceError, ValidationError, NotFoundError, ConflictError, InternalError
from capstone.utils.security import hash_password
from capstone.utils.validators import validate_email, validate_password
from capstone.utils.logger import get_logger

logger = get_logger(__name__)


def serialize_faculty(faculty: Faculty) -> Dict:
    return {
        'id': faculty.id,
        'employee_id': faculty.employee_id,
        'name': faculty.name,
        'email_id': faculty.email_id,
        'role': faculty.role.value
    }


class FacultyService:
    """Service for faculty and admin accounts"""

    def __init__(self):
        self.faculty_db = DatabaseManager(Faculty)

    def create_faculty(self, data: Dict, role: FacultyRole = FacultyRole.FACULTY) -> Dict:
        """Register a faculty or admin account"""
        try:
            for field in ('name', 'emailId', 'password', 'employeeId'):
                if not data.get(field):
                    raise ValidationError(f'{field} is required')

            valid, error = validate_email(data['emailId'])
            if not valid:
                raise ValidationError(error)

            valid, error = validate_password(data['password'])
            if not valid:
                raise ValidationError(error)

            label = 'Admin' if role == FacultyRole.ADMIN else 'Faculty'

            if self.faculty_db.exists(email_id=data['emailId']):
                raise ConflictError(f'{label} already registered!')

            if self.faculty_db.exists(employee_id=data['employeeId']):
                raise ConflictError('Employee ID already registered!')

            faculty = self.faculty_db.create(
                name=data['name'],
                email_id=data['emailId'],
                employee_id=data['employeeId'],
                password_hash=hash_password(data['password']),
                role=role
            )

            logger.info(f"{label} {faculty.employee_id} created")

            return {
                'success': True,
                'message': f'{label} created successfully!',
                'data': serialize_faculty(faculty)
            }

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error creating faculty: {str(e)}")
            return InternalError('Failed to create faculty').to_result()

    def get_faculty_details(self, employee_id: str) -> Dict:
        """Look up a faculty member by employee id"""
        try:
            faculty = self.faculty_db.get_by(employee_id=employee_id)
            if not faculty:
                raise NotFoundError('no faculty found with the provided ID')

            return {'success': True, 'message': 'Operation successful', 'data': serialize_faculty(faculty)}

        except ServiceError as e:
            return e.to_result()
        except Exception as e:
            logger.error(f"Error getting faculty {employee_id}: {str(e)}")
            return InternalError('Failed to get faculty').to_result()
