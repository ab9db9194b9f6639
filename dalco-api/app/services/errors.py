class PipelineError(Exception):
    """Raised out of the message pipeline when a request cannot be fulfilled."""


class OrderPersistenceError(PipelineError):
    def __init__(self, customer_name: str, reason: str):
        self.customer_name = customer_name
        self.reason = reason
        super().__init__(f"Failed to record order for {customer_name}: {reason}")


class SheetsError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)
