"""Tutoring session record model."""

from sqlalchemy import BigInteger, Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from tutor_backend.app.core.time import utc_now
from tutor_backend.app.db.base_class import Base
from tutor_backend.app.models.student import Student


class SessionRecord(Base):
    __tablename__ = "session_records"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id", ondelete="CASCADE"), nullable=False, index=True)
    session_date = Column(Date, nullable=False)
    # YYYY-MM key used by invoices and dashboard grouping
    month = Column(String(7), nullable=False, index=True)
    sessions = Column(Integer, nullable=False, default=1)
    hours = Column(Integer, nullable=False, default=0)
    price_per_hour = Column(BigInteger, nullable=False, default=0)
    total_amount = Column(BigInteger, nullable=False, default=0)
    paid = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    student = relationship(Student, back_populates="session_records")
