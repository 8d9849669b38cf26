import uuid

from sqlalchemy import Column, String, Float, Boolean, Date, ForeignKey
from sqlalchemy.orm import relationship
from core.database import Base


class Beach(Base):
    __tablename__ = "beaches"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, index=True)
    region_id = Column(String(36), ForeignKey("regions.id"), nullable=False, index=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    description = Column(String(500), nullable=True)

    wave_type = Column(String(50), nullable=True)  # "Beach Break", "Point Break", ...
    difficulty = Column(String(50), nullable=True)  # "Beginner" ~ "Advanced"
    crime_level = Column(String(50), nullable=True)  # "Low", "Medium", "High"
    has_shark_attack = Column(Boolean, default=False, nullable=False)
    last_shark_attack = Column(Date, nullable=True)
    is_hidden_gem = Column(Boolean, default=False, nullable=False)

    # 점수 계산용 선호 조건 (쉼표로 구분된 방위 e.g. "NE,E")
    optimal_wind_directions = Column(String(100), nullable=True)
    optimal_swell_directions = Column(String(100), nullable=True)
    swell_size_min = Column(Float, nullable=True)  # m
    swell_size_max = Column(Float, nullable=True)  # m
    ideal_swell_period_min = Column(Float, nullable=True)  # s

    region = relationship("Region", back_populates="beaches")

    def __repr__(self):
        return f"<Beach(name='{self.name}', region_id='{self.region_id}', wave_type='{self.wave_type}')>"
