from typing import List
from uuid import UUID, uuid4

from sqlalchemy.orm import Session

from app.logging_config import get_logger
from app.models import ConversationTurn, Lead
from app.services.commerce_types import Intent
from app.services.conversation_service import list_recent_turns

logger = get_logger("lead_service")

RECENT_LEADS_LIMIT = 10


def serialize_turn(turn: ConversationTurn) -> dict:
    return {
        "id": str(turn.id),
        "channel": turn.channel,
        "direction": turn.direction,
        "to": turn.peer_address,
        "content": turn.content,
        "locale": turn.locale,
        "intent": turn.intent,
        "metadata": turn.turn_metadata or {},
        "status": turn.status,
        "createdAt": turn.created_at.isoformat() if turn.created_at else None,
    }


def list_leads(db: Session, limit: int = RECENT_LEADS_LIMIT) -> List[dict]:
    """Most recent order replies, newest first."""
    return [serialize_turn(turn) for turn in list_recent_turns(db, Intent.ORDER, limit=limit)]


def create_lead(db: Session, payload: dict) -> UUID:
    known = {"name", "phone_number", "interest", "notes", "source"}
    lead = Lead(
        id=uuid4(),
        name=payload.get("name"),
        phone_number=payload.get("phone_number"),
        interest=payload.get("interest"),
        notes=payload.get("notes"),
        source=payload.get("source") or "manual",
        status="new",
        extra={key: value for key, value in payload.items() if key not in known},
    )
    db.add(lead)
    db.commit()
    logger.info(f"Lead recorded: {lead.id}")
    return lead.id
