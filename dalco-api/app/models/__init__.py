from app.models.conversation_turn import ConversationTurn
from app.models.lead import Lead

__all__ = [
    "ConversationTurn",
    "Lead",
]
