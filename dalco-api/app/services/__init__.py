from app.services.commerce_types import (
    AvailabilityResult,
    InboundMessage,
    Intent,
    InventoryQuery,
    Order,
)
from app.services.errors import OrderPersistenceError, PipelineError
from app.services.pipeline_service import MessagePipeline, PipelineReply
from app.services.state_machine import (
    InvalidTransitionError,
    PipelineState,
    can_transition,
    transition,
)
