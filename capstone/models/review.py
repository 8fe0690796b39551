from sqlalchemy import Column, Integer, Boolean, ForeignKey, Enum, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
import enum
from .base import BaseModel


class ReviewType(enum.Enum):
    REVIEW0 = "review0"
    DRAFT_REVIEW = "draftReview"
    REVIEW1 = "review1"
    REVIEW2 = "review2"
    REVIEW3 = "review3"


class FacultyType(enum.Enum):
    GUIDE = "guide"
    PANEL = "panel"


REVIEW_TYPES = {
    FacultyType.GUIDE: [ReviewType.REVIEW0, ReviewType.DRAFT_REVIEW, ReviewType.REVIEW1],
    FacultyType.PANEL: [ReviewType.REVIEW2, ReviewType.REVIEW3]
}


def faculty_type_for(review_type: ReviewType) -> FacultyType:
    """Return the faculty type that owns a review type"""
    for faculty_type, review_types in REVIEW_TYPES.items():
        if review_type in review_types:
            return faculty_type
    raise ValueError(f"Unknown review type {review_type}")


class ReviewRecord(BaseModel):
    __tablename__ = 'review_records'
    __table_args__ = (UniqueConstraint('student_id', 'review_type', name='uq_review_student_type'),)

    student_id = Column(Integer, ForeignKey('students.id'), nullable=False, index=True)
    review_type = Column(Enum(ReviewType), nullable=False)

    # Component marks and comments as submitted by the guide or panel
    data = Column(JSON, default=dict)

    # Manual override, only ever cleared through request approval
    locked = Column(Boolean, default=False, nullable=False)

    # Relationships
    student = relationship("Student", back_populates="reviews")
