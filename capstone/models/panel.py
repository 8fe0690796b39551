from sqlalchemy import Column, Integer, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Panel(BaseModel):
    __tablename__ = 'panels'

    # Unordered pair; stored order is kept for display
    faculty1_id = Column(Integer, ForeignKey('faculties.id'), nullable=False)
    faculty2_id = Column(Integer, ForeignKey('faculties.id'), nullable=False)

    # Relationships
    faculty1 = relationship("Faculty", foreign_keys=[faculty1_id])
    faculty2 = relationship("Faculty", foreign_keys=[faculty2_id])
    projects = relationship("Project", back_populates="panel")

    @property
    def member_ids(self):
        return (self.faculty1_id, self.faculty2_id)

    def has_member(self, faculty_id) -> bool:
        return faculty_id in self.member_ids
