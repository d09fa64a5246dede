"""Google Sheets client authenticated with a service account."""

import json
import logging
import time
from datetime import datetime, timedelta
from typing import List, Optional
from urllib.parse import quote

import httpx
import jwt

from app.core.exceptions import LedgerError

logger = logging.getLogger(__name__)


class GoogleSheetsClient:
    """
    Minimal Sheets v4 ``values`` client.

    Access tokens come from the OAuth2 JWT-bearer grant signed with the
    service account's private key and are cached until shortly before they
    expire. Every failure surfaces as ``LedgerError``.
    """

    BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
    TOKEN_URL = "https://oauth2.googleapis.com/token"
    SCOPE = "https://www.googleapis.com/auth/spreadsheets"

    def __init__(
        self,
        service_account_info: dict,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.client_email = service_account_info.get("client_email", "")
        self.private_key = service_account_info.get("private_key", "")
        self.private_key_id = service_account_info.get("private_key_id")
        self.token_uri = service_account_info.get("token_uri") or self.TOKEN_URL
        self.timeout = timeout
        self._transport = transport
        self._access_token = None
        self._token_expiry = None

    @classmethod
    def from_json(cls, raw: str, **kwargs) -> "GoogleSheetsClient":
        """Build a client from the service-account JSON document."""
        try:
            info = json.loads(raw)
        except ValueError as e:
            raise LedgerError("GOOGLE_SERVICE_ACCOUNT is not valid JSON") from e
        return cls(info, **kwargs)

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    def _build_assertion(self) -> str:
        now = int(time.time())
        claims = {
            "iss": self.client_email,
            "scope": self.SCOPE,
            "aud": self.token_uri,
            "iat": now,
            "exp": now + 3600,
        }
        headers = {"kid": self.private_key_id} if self.private_key_id else None
        return jwt.encode(claims, self.private_key, algorithm="RS256", headers=headers)

    async def _get_access_token(self, force_refresh: bool = False) -> str:
        """Get an access token for the service account."""
        if not force_refresh and self._access_token and self._token_expiry:
            if datetime.utcnow() < self._token_expiry - timedelta(minutes=5):
                return self._access_token

        try:
            assertion = self._build_assertion()
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            raise LedgerError("Service account key could not be used") from e

        data = {
            "grant_type": "urn:ietf:params:oauth:grant-type:jwt-bearer",
            "assertion": assertion,
        }

        try:
            async with self._http() as client:
                response = await client.post(self.token_uri, data=data)
        except httpx.HTTPError as e:
            logger.error(f"❌ [Sheets] Token request failed: {e}")
            raise LedgerError() from e

        if response.status_code != 200:
            logger.error(f"❌ [Sheets] Failed to get access token: {response.text}")
            raise LedgerError()

        try:
            token_data = response.json()
            self._access_token = token_data["access_token"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"❌ [Sheets] Unexpected token response: {response.text}")
            raise LedgerError() from e
        expires_in = token_data.get("expires_in", 3600)
        self._token_expiry = datetime.utcnow() + timedelta(seconds=expires_in)

        logger.info(f"🔑 [Sheets] New access token obtained, expires in {expires_in}s")
        return self._access_token

    def clear_token_cache(self) -> None:
        self._access_token = None
        self._token_expiry = None

    async def _request(
        self,
        method: str,
        spreadsheet_id: str,
        path: str,
        params: dict = None,
        body: dict = None,
        retry_with_refresh: bool = True,
    ) -> dict:
        token = await self._get_access_token()
        url = f"{self.BASE_URL}/{spreadsheet_id}/{path}"
        headers = {"Authorization": f"Bearer {token}"}

        try:
            async with self._http() as client:
                response = await client.request(method, url, headers=headers, params=params, json=body)
        except httpx.HTTPError as e:
            logger.error(f"❌ [Sheets] {method} {path} failed: {e}")
            raise LedgerError() from e

        if response.status_code == 401 and retry_with_refresh:
            logger.warning("⚠️ [Sheets] Got 401, refreshing token and retrying...")
            self.clear_token_cache()
            return await self._request(method, spreadsheet_id, path, params, body, retry_with_refresh=False)

        if response.status_code >= 300:
            logger.error(f"❌ [Sheets] {method} {path} returned {response.status_code}: {response.text}")
            raise LedgerError()

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"❌ [Sheets] {method} {path} returned a non-JSON body")
            raise LedgerError() from e

    @staticmethod
    def _encode_range(a1_range: str) -> str:
        return quote(a1_range, safe="")

    async def get_values(self, spreadsheet_id: str, a1_range: str) -> List[List[str]]:
        """Read a range. Missing trailing cells are simply absent from each row."""
        data = await self._request("GET", spreadsheet_id, f"values/{self._encode_range(a1_range)}")
        return data.get("values") or []

    async def append_values(self, spreadsheet_id: str, a1_range: str, rows: List[list]) -> dict:
        return await self._request(
            "POST",
            spreadsheet_id,
            f"values/{self._encode_range(a1_range)}:append",
            params={"valueInputOption": "USER_ENTERED", "insertDataOption": "INSERT_ROWS"},
            body={"values": rows},
        )

    async def update_values(self, spreadsheet_id: str, a1_range: str, rows: List[list]) -> dict:
        return await self._request(
            "PUT",
            spreadsheet_id,
            f"values/{self._encode_range(a1_range)}",
            params={"valueInputOption": "USER_ENTERED"},
            body={"range": a1_range, "values": rows},
        )
