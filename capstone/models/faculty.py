from sqlalchemy import Column, String, Enum
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel


class FacultyRole(enum.Enum):
    FACULTY = "faculty"
    ADMIN = "admin"


class Faculty(BaseModel):
    __tablename__ = 'faculties'

    employee_id = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(150), nullable=False)
    email_id = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(FacultyRole), default=FacultyRole.FACULTY, nullable=False)

    # Relationships
    guided_projects = relationship("Project", back_populates="guide_faculty", foreign_keys='Project.guide_faculty_id')
    requests = relationship("EditRequest", back_populates="faculty")
