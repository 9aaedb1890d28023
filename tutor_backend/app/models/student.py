"""Student model."""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from tutor_backend.app.core.time import utc_now
from tutor_backend.app.db.base_class import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    phone = Column(String(50), nullable=True)
    schedule = Column(String, nullable=True)
    price_per_hour = Column(BigInteger, nullable=False, default=0)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    session_records = relationship(
        "SessionRecord",
        back_populates="student",
        cascade="all, delete-orphan",
    )
