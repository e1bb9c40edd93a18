"""SQLAlchemy ORM models for the transfer history store"""

from sqlalchemy import Column, Date, DateTime, Float, String, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class FundTransfer(Base):
    """Fund transfer as shown in the transfer history table"""

    __tablename__ = "fund_transfer"

    id = Column(String(36), primary_key=True)
    initiated_on = Column(Date, nullable=False)
    source_account = Column(Text, nullable=False, index=True)
    destination_account = Column(Text, nullable=False, index=True)
    amount = Column(Float, nullable=False)
    status = Column(String(16), nullable=False, default="pending")
    reference = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())
