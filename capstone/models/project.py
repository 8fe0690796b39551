from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from .base import BaseModel


class Project(BaseModel):
    __tablename__ = 'projects'

    name = Column(String(255), nullable=False)
    guide_faculty_id = Column(Integer, ForeignKey('faculties.id'), nullable=False, index=True)
    panel_id = Column(Integer, ForeignKey('panels.id', ondelete='SET NULL'), nullable=True, index=True)

    # Relationships
    guide_faculty = relationship("Faculty", back_populates="guided_projects", foreign_keys=[guide_faculty_id])
    panel = relationship("Panel", back_populates="projects")
    students = relationship("Student", back_populates="project", order_by="Student.id")
