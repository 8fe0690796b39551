from sqlalchemy import Column, String, Integer, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel
from .review import ReviewType, FacultyType


class RequestStatus(enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class EditRequest(BaseModel):
    __tablename__ = 'edit_requests'

    faculty_type = Column(Enum(FacultyType), nullable=False, index=True)
    review_type = Column(Enum(ReviewType), nullable=False)
    student_id = Column(Integer, ForeignKey('students.id'), nullable=True, index=True)
    faculty_id = Column(Integer, ForeignKey('faculties.id'), nullable=False)

    reason = Column(String(1000), nullable=False)

    # Status; resolved_at is set exactly once
    status = Column(Enum(RequestStatus), default=RequestStatus.PENDING, nullable=False, index=True)
    resolved_at = Column(DateTime)

    # Relationships
    student = relationship("Student", back_populates="requests")
    faculty = relationship("Faculty", back_populates="requests")

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None
