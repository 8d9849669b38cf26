import uuid
from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, Date, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from core.database import Base


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    region_id = Column(String(36), ForeignKey("regions.id"), nullable=False)
    forecast_id = Column(String(36), ForeignKey("forecasts.id"), nullable=True)
    log_entry_id = Column(String(36), ForeignKey("log_entries.id"), nullable=True, index=True)
    forecast_date = Column(Date, nullable=True)

    properties = Column(JSON, nullable=False, default=list)  # [{"optimalValue": .., "range": ..}, ...]
    notification_method = Column(String(20), nullable=False)  # "email", "whatsapp", "both", "app"
    contact_info = Column(String(255), nullable=False)
    active = Column(Boolean, nullable=False, default=True)
    alert_type = Column(String(20), nullable=False, default="variables")
    star_rating = Column(Integer, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    log_entry = relationship("LogEntry", back_populates="alerts")
    region = relationship("Region")
    forecast = relationship("Forecast")

    def __repr__(self):
        return f"<Alert(name='{self.name}', user_id='{self.user_id}', active={self.active})>"
