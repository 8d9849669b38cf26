import uuid

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from core.database import Base


class Region(Base):
    __tablename__ = "regions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, index=True)
    country = Column(String(100), nullable=False, index=True)
    continent = Column(String(50), nullable=False)

    beaches = relationship("Beach", back_populates="region")

    def __repr__(self):
        return f"<Region(name='{self.name}', country='{self.country}')>"
