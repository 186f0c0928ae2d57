"""Lead model for the durable lead store."""

from sqlalchemy import Column, DateTime, Integer, String

from haloride.db.base_class import Base
from haloride.core.time import utc_now


class Lead(Base):
    __tablename__ = "leads"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    grade = Column(String, nullable=False)
    school_name = Column(String, nullable=True)
    city = Column(String, nullable=False)
    mobile_number = Column(String, nullable=False)
    email = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
