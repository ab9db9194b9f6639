import uuid

from sqlalchemy import Column, Text
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID
from sqlalchemy.sql import func

from app.database import Base


class ConversationTurn(Base):
    __tablename__ = "conversation_turns"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    channel = Column(Text, nullable=False)  # whatsapp, telegram, web
    direction = Column(Text, nullable=False)  # inbound, outbound
    peer_address = Column(Text, nullable=False)  # sender for inbound, recipient for outbound
    content = Column(Text, nullable=False)
    locale = Column(Text, nullable=False, default="ms")
    intent = Column(Text)
    turn_metadata = Column("metadata", JSONB, nullable=False, default=dict)
    status = Column(Text, nullable=False)  # received, sent
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
