from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Enum, JSON
from sqlalchemy.sql import func
from collegeadmin.db.base import Base


class Circular(Base):
    __tablename__ = "circulars"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String, nullable=False, default="general")
    priority = Column(Enum("normal", "high", "urgent", name="circular_priority"), nullable=False, default="normal")
    is_active = Column(Boolean, nullable=False, default=True)
    published_at = Column(DateTime(timezone=True), server_default=func.now())
    expires_at = Column(DateTime(timezone=True), nullable=True)
    # ["all"], ["student"], ["faculty", "student"] ...
    target_audience = Column(JSON, nullable=False, default=lambda: ["all"])
    attachment_url = Column(String, nullable=True)
    published_by = Column(Integer, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
