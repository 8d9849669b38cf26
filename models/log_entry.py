import uuid
from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, Text, Date, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from core.database import Base


class LogEntry(Base):
    __tablename__ = "log_entries"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    date = Column(Date, nullable=False, index=True)
    surfer_name = Column(String(100), nullable=True)
    surfer_email = Column(String(255), nullable=True)
    surfer_rating = Column(Integer, nullable=False, default=0)  # 0 ~ 5
    comments = Column(Text, nullable=True)
    is_private = Column(Boolean, nullable=False, default=False)
    is_anonymous = Column(Boolean, nullable=False, default=False)
    wave_type = Column(String(50), nullable=True)
    image_url = Column(String(500), nullable=True)
    video_url = Column(String(500), nullable=True)
    video_platform = Column(String(50), nullable=True)

    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    region_id = Column(String(36), ForeignKey("regions.id"), nullable=False, index=True)
    beach_id = Column(String(36), ForeignKey("beaches.id"), nullable=False, index=True)
    forecast_id = Column(String(36), ForeignKey("forecasts.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User")
    region = relationship("Region")
    beach = relationship("Beach")
    forecast = relationship("Forecast")
    # 첫 번째 알림(alertId)이 항상 같도록 생성 순서로 정렬
    alerts = relationship(
        "Alert",
        back_populates="log_entry",
        order_by="[Alert.created_at, Alert.id]",
    )

    def __repr__(self):
        return f"<LogEntry(date='{self.date}', beach_id='{self.beach_id}', rating={self.surfer_rating})>"
