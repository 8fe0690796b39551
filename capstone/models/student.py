from sqlalchemy import Column, String, Integer, ForeignKey, JSON
from sqlalchemy.orm import relationship
from .base import BaseModel


class Student(BaseModel):
    __tablename__ = 'students'

    reg_no = Column(String(50), unique=True, nullable=False, index=True)
    name = Column(String(150), nullable=False)
    email_id = Column(String(255))
    project_id = Column(Integer, ForeignKey('projects.id'), nullable=True, index=True)

    # Personal deadline overrides keyed by review type value, same shape as
    # SystemConfig.default_deadlines
    deadline = Column(JSON)

    # Relationships
    project = relationship("Project", back_populates="students")
    reviews = relationship("ReviewRecord", back_populates="student", cascade="all, delete-orphan")
    requests = relationship("EditRequest", back_populates="student")

    def review_record(self, review_type):
        """Return this student's ReviewRecord for a review type, or None."""
        for record in self.reviews:
            if record.review_type == review_type:
                return record
        return None
