from typing import Optional

import httpx

from app.logging_config import get_logger
from app.services.result import Result

logger = get_logger("jamai_client")

TABLE_TYPES = {"action", "knowledge", "generative"}


class JamAIClient:
    """Thin transport for JamAI Base table invocation.

    Failures come back as ``Result.failure`` rather than exceptions so callers
    can substitute a deterministic answer.
    """

    def __init__(self, base_url: str, api_key: Optional[str] = None, timeout_seconds: float = 15.0):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key or ""
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def invoke_table(self, table_type: str, table_id: str, payload: dict) -> Result[dict]:
        if table_type not in TABLE_TYPES:
            raise ValueError(f"Unknown JamAI table type: {table_type}")

        endpoint = f"{self.base_url}/tables/{table_type}/{table_id}/invoke"
        logger.debug(f"JamAI request: {table_type}/{table_id}")

        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.post(endpoint, headers=self._headers(), json=payload)
        except httpx.TimeoutException as exc:
            logger.error(f"JamAI {table_type} invocation timed out after {self.timeout_seconds}s: {exc}")
            return Result.failure(f"timeout after {self.timeout_seconds}s", "timeout")
        except httpx.HTTPError as exc:
            logger.error(f"JamAI {table_type} invocation failed: {exc}")
            return Result.failure(str(exc), "transport_error")

        if response.status_code < 200 or response.status_code >= 300:
            logger.error(f"JamAI {table_type} invocation failed: {response.status_code} - {response.text[:200]}")
            return Result.failure(f"HTTP {response.status_code}", "http_error")

        try:
            data = response.json()
        except ValueError:
            return Result.failure("response is not JSON", "invalid_response")

        if not isinstance(data, dict):
            return Result.failure("response is not an object", "invalid_response")

        return Result.success(data)
