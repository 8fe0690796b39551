import re
from typing import Optional, Tuple
from capstone.models.review import ReviewType, FacultyType, REVIEW_TYPES
from capstone.utils.errors import ValidationError
from config.config import Config


def validate_email(email: str) -> Tuple[bool, Optional[str]]:
    """Validate email format and institutional domain"""
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    if not email:
        return False, "Email is required"
    if not re.match(pattern, email):
        return False, "Invalid email format"
    if not email.lower().endswith(Config.COLLEGE_EMAIL_DOMAIN.lower()):
        return False, "Only college emails allowed!"
    return True, None


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """Validate password strength"""
    message = ("Password must be at least 8 characters and include uppercase, "
               "lowercase, number, and special character")
    if not password or len(password) < 8:
        return False, message
    if not re.search(r'[A-Z]', password):
        return False, message
    if not re.search(r'[a-z]', password):
        return False, message
    if not re.search(r'\d', password):
        return False, message
    if not re.search(r'[^A-Za-z0-9]', password):
        return False, message
    return True, None


def parse_faculty_type(value) -> FacultyType:
    """Coerce 'guide'/'panel' into a FacultyType or raise ValidationError"""
    if isinstance(value, FacultyType):
        return value
    try:
        return FacultyType(value)
    except ValueError:
        raise ValidationError("facultyType should either be 'guide' or 'panel'")


def parse_review_type(value, faculty_type: Optional[FacultyType] = None) -> ReviewType:
    """Coerce a review type value, optionally checking it belongs to a faculty type"""
    if isinstance(value, ReviewType):
        review_type = value
    else:
        try:
            review_type = ReviewType(value)
        except ValueError:
            allowed = ', '.join(r.value for r in ReviewType)
            raise ValidationError(f"Invalid reviewType. Must be one of: {allowed}")

    if faculty_type is not None and review_type not in REVIEW_TYPES[faculty_type]:
        raise ValidationError(
            f"reviewType '{review_type.value}' is not a {faculty_type.value} review"
        )
    return review_type
