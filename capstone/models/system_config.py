from sqlalchemy import Column, JSON
from .base import BaseModel


class SystemConfig(BaseModel):
    """Process-wide singleton row holding the default deadline windows"""
    __tablename__ = 'system_config'

    # review type value -> {"from": iso, "to": iso} or an iso cutoff string
    default_deadlines = Column(JSON, default=dict)
