import uuid
from datetime import datetime

from sqlalchemy import Column, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from core.database import Base


class Forecast(Base):
    """지역별 하루 단위 예보 스냅샷 (date, region_id 당 하나)"""
    __tablename__ = "forecasts"
    __table_args__ = (
        UniqueConstraint("date", "region_id", name="uq_forecast_date_region"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=False, index=True)
    region_id = Column(String(36), ForeignKey("regions.id"), nullable=False, index=True)
    wind_speed = Column(Float, nullable=False)  # knots
    wind_direction = Column(Float, nullable=False)  # degrees
    swell_height = Column(Float, nullable=False)  # m
    swell_period = Column(Float, nullable=False)  # s
    swell_direction = Column(Float, nullable=False)  # degrees
    swell_cardinal_direction = Column(String(8), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    region = relationship("Region")

    def __repr__(self):
        return f"<Forecast(region_id='{self.region_id}', date='{self.date}', swell_height={self.swell_height})>"
