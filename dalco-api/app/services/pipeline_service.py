"""Single-message intent routing and fulfillment.

One call to :meth:`MessagePipeline.process_message` logs the inbound turn,
classifies it, fulfills the intent, logs the reply and returns it. The only
error that leaves this module is :class:`OrderPersistenceError`: telling a
customer their order was recorded when it was not is worse than failing.
"""

from dataclasses import dataclass, field

from app.logging_config import bind_context, get_logger
from app.services.alert_service import alert_order_failure
from app.services.commerce_types import AvailabilityResult, InboundMessage, Intent
from app.services.conversation_service import ConversationLogger
from app.services.errors import OrderPersistenceError, SheetsError
from app.services.intent_service import IntentService
from app.services.inventory_service import InventoryService
from app.services.order_service import OrderService
from app.services.state_machine import PipelineState, branch_for, transition

logger = get_logger("pipeline_service")

MSG_IN_STOCK = (
    "Yes, stok {quantity} unit untuk {item_name} tersedia. "
    "Baki stok: {remaining}. Mahu teruskan pesanan?"
)
MSG_OUT_OF_STOCK = "Maaf, stok tidak mencukupi sekarang. Boleh kami cadangkan pilihan lain?"
MSG_ORDER_RECORDED = (
    "Terima kasih {customer}! "
    "Pesanan {item_name} ({quantity} unit) telah direkod. "
    "Kami akan hubungi anda untuk pengesahan penghantaran."
)
MSG_GREETING = "Hai! Saya DalCo bot. Saya boleh bantu semak stok, jawab FAQ, atau urus pesanan borong anda."


@dataclass
class PipelineReply:
    intent: Intent
    reply: str
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"intent": self.intent.value, "reply": self.reply, "metadata": self.metadata}


class MessagePipeline:
    def __init__(
        self,
        intents: IntentService,
        inventory: InventoryService,
        orders: OrderService,
        journal: ConversationLogger,
    ):
        self.intents = intents
        self.inventory = inventory
        self.orders = orders
        self.journal = journal

    def process_message(self, message: InboundMessage) -> PipelineReply:
        log = bind_context(logger, sender=message.sender_id, channel=message.channel)
        state = PipelineState.RECEIVED

        self.journal.log_inbound(
            channel=message.channel,
            sender=message.sender_id,
            content=message.text,
            locale=message.locale,
        )

        intent = self.intents.detect_intent(message.text)
        state = transition(state, PipelineState.CLASSIFIED)
        log.info("Message classified", context={"intent": intent.value})

        state = transition(state, branch_for(intent))
        if state == PipelineState.FAQ_ANSWERED:
            reply, metadata = self._answer_faq(message)
        elif state == PipelineState.INVENTORY_CHECKED:
            reply, metadata = self._check_inventory(message, log)
        elif state == PipelineState.ORDER_RECORDED:
            reply, metadata = self._record_order(message, log)
        else:
            reply, metadata = MSG_GREETING, {}

        self.journal.log_outbound(
            channel=message.channel,
            recipient=message.sender_id,
            content=reply,
            locale=message.locale,
            intent=intent,
            metadata=metadata,
        )
        state = transition(state, PipelineState.LOGGED)

        transition(state, PipelineState.REPLIED)
        return PipelineReply(intent=intent, reply=reply, metadata=metadata)

    def _answer_faq(self, message: InboundMessage) -> tuple[str, dict]:
        return self.intents.answer_faq(message.text), {}

    def _check_inventory(self, message: InboundMessage, log) -> tuple[str, dict]:
        query = self.intents.extract_inventory_query(message.text)
        try:
            availability = self.inventory.check_availability(query)
        except SheetsError as exc:
            log.warning(f"Inventory check failed, treating as unavailable: {exc}")
            availability = AvailabilityResult(available=False)

        metadata = {"query": query.to_dict(), "availability": availability.to_dict()}
        if availability.available:
            reply = MSG_IN_STOCK.format(
                quantity=query.quantity,
                item_name=availability.item.name,
                remaining=availability.remaining_stock,
            )
        else:
            reply = MSG_OUT_OF_STOCK
        return reply, metadata

    def _record_order(self, message: InboundMessage, log) -> tuple[str, dict]:
        order = self.intents.extract_order(message.text, message.sender_id, message.display_name)
        try:
            self.orders.append_order(order)
        except OrderPersistenceError as exc:
            log.error("Order persistence failed", context={"customer": order.customer_name, "error": exc.reason})
            alert_order_failure(order.customer_name, order.phone_number, exc.reason)
            raise

        first = order.first_item
        reply = MSG_ORDER_RECORDED.format(
            customer=order.customer_name,
            item_name=first.item_name,
            quantity=first.quantity,
        )
        return reply, {"order": order.to_dict()}
