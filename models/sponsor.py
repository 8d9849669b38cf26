import uuid

from sqlalchemy import Column, String, Boolean
from core.database import Base


class Sponsor(Base):
    __tablename__ = "sponsors"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    logo = Column(String(500), nullable=False)
    link = Column(String(500), nullable=False)
    active = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<Sponsor(name='{self.name}')>"
