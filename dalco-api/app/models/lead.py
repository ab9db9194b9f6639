import uuid

from sqlalchemy import Column, Text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID
from sqlalchemy.sql import func

from app.database import Base


class Lead(Base):
    __tablename__ = "leads"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text)
    phone_number = Column(Text)
    interest = Column(Text)
    notes = Column(Text)
    source = Column(Text, nullable=False, default="manual")
    status = Column(Text, nullable=False, default="new")  # new, contacted, won, lost
    extra = Column(JSONB, nullable=False, default=dict)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
