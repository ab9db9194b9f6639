"""Append-only conversation journal.

Writes are best effort: each one opens its own session, and any failure is
logged and swallowed so the reply path never depends on the log store.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from sqlalchemy.orm import Session

from app.logging_config import get_logger
from app.models import ConversationTurn
from app.services.commerce_types import Intent

logger = get_logger("conversation_service")

INBOUND = "inbound"
OUTBOUND = "outbound"


def _release(step: Callable[[], None]) -> None:
    try:
        step()
    except Exception as exc:
        logger.debug(f"Journal session cleanup failed: {exc}")


@dataclass
class JournalWrite:
    session: Optional[Session] = None
    committed: bool = False


@contextmanager
def journal_session(session_factory: Callable[[], Session], description: str) -> Iterator[JournalWrite]:
    """Yield a session that is committed on exit; on failure roll back, warn, and carry on."""
    try:
        session = session_factory()
    except Exception as exc:
        logger.warning(f"Failed to log message: {exc}", extra={"context": {"turn": description}})
        yield JournalWrite()
        return

    write = JournalWrite(session=session)
    try:
        yield write
        session.commit()
        write.committed = True
    except Exception as exc:
        logger.warning(f"Failed to log message: {exc}", extra={"context": {"turn": description}})
        _release(session.rollback)
    finally:
        _release(session.close)


class ConversationLogger:
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def log_turn(
        self,
        *,
        channel: str,
        direction: str,
        peer_address: str,
        content: str,
        locale: str,
        status: str,
        intent: Optional[Intent] = None,
        metadata: Optional[dict] = None,
    ) -> bool:
        """Journal one turn. Returns False when the write did not go through."""
        with journal_session(self.session_factory, direction) as write:
            if write.session is None:
                return False
            write.session.add(
                ConversationTurn(
                    channel=channel,
                    direction=direction,
                    peer_address=peer_address,
                    content=content,
                    locale=locale,
                    intent=intent.value if intent else None,
                    turn_metadata=metadata or {},
                    status=status,
                )
            )
        return write.committed

    def log_inbound(self, *, channel: str, sender: str, content: str, locale: str) -> bool:
        return self.log_turn(
            channel=channel,
            direction=INBOUND,
            peer_address=sender,
            content=content,
            locale=locale,
            status="received",
        )

    def log_outbound(
        self,
        *,
        channel: str,
        recipient: str,
        content: str,
        locale: str,
        intent: Intent,
        metadata: dict,
    ) -> bool:
        return self.log_turn(
            channel=channel,
            direction=OUTBOUND,
            peer_address=recipient,
            content=content,
            locale=locale,
            intent=intent,
            metadata=metadata,
            status="sent",
        )


def list_recent_turns(db: Session, intent: Intent, limit: int = 10) -> List[ConversationTurn]:
    return (
        db.query(ConversationTurn)
        .filter(ConversationTurn.intent == intent.value)
        .order_by(ConversationTurn.created_at.desc())
        .limit(limit)
        .all()
    )
