"""Google Sheets v4 values API over httpx.

Only the two calls the service needs: read a range and append rows to it.
"""

from typing import Callable, List, Optional
from urllib.parse import quote

import httpx

from app.logging_config import get_logger
from app.services.errors import SheetsError

logger = get_logger("sheets_client")

SHEETS_API_URL = "https://sheets.googleapis.com/v4/spreadsheets"
SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def normalize_private_key(raw_key: str) -> str:
    """Undo the quoting and escaped newlines that .env files tend to add."""
    key = raw_key.strip()
    if len(key) >= 2 and key.startswith('"') and key.endswith('"'):
        key = key[1:-1]
    return key.replace("\\n", "\n")


def service_account_token_provider(email: str, private_key: str) -> Callable[[], str]:
    """Return a callable producing a fresh OAuth access token for the service account.

    The key is parsed on first use, so a malformed key surfaces as a
    ``SheetsError`` from the request rather than at wiring time.
    """
    from google.auth.transport.requests import Request
    from google.oauth2 import service_account

    credentials = []

    def _token() -> str:
        if not credentials:
            credentials.append(
                service_account.Credentials.from_service_account_info(
                    {
                        "client_email": email,
                        "private_key": normalize_private_key(private_key),
                        "token_uri": TOKEN_URI,
                    },
                    scopes=SCOPES,
                )
            )
        current = credentials[0]
        if not current.valid:
            current.refresh(Request())
        return current.token

    return _token


class SheetsClient:
    def __init__(
        self,
        spreadsheet_id: Optional[str],
        token_provider: Optional[Callable[[], str]],
        timeout_seconds: float = 15.0,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.token_provider = token_provider
        self.timeout_seconds = timeout_seconds

    def _request(self, method: str, path: str, **kwargs) -> dict:
        if not self.spreadsheet_id or self.token_provider is None:
            raise SheetsError("Google Sheets env vars missing")

        try:
            token = self.token_provider()
        except Exception as exc:
            raise SheetsError(f"Google Sheets authorization failed: {exc}") from exc

        url = f"{SHEETS_API_URL}/{self.spreadsheet_id}/values/{path}"
        try:
            with httpx.Client(timeout=self.timeout_seconds) as client:
                response = client.request(
                    method,
                    url,
                    headers={"Authorization": f"Bearer {token}"},
                    **kwargs,
                )
        except httpx.HTTPError as exc:
            raise SheetsError(f"Google Sheets request failed: {exc}") from exc

        if response.status_code != 200:
            logger.error(f"Google Sheets error: {response.status_code} - {response.text[:200]}")
            raise SheetsError(f"Google Sheets API error: {response.status_code}", response.status_code)

        try:
            data = response.json()
        except ValueError as exc:
            raise SheetsError("Google Sheets returned a non-JSON body", response.status_code) from exc

        if not isinstance(data, dict):
            raise SheetsError("Google Sheets response is not an object", response.status_code)
        return data

    def get_values(self, range_name: str) -> List[list]:
        data = self._request("GET", quote(range_name, safe="!:"))
        return data.get("values") or []

    def append_values(self, range_name: str, rows: List[list]) -> dict:
        data = self._request(
            "POST",
            f"{quote(range_name, safe='!:')}:append",
            params={"valueInputOption": "USER_ENTERED"},
            json={"values": rows},
        )
        return data.get("updates") or {}
