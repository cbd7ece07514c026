"""Banking aggregator HTTP client for pulling recent transactions"""

import httpx
from datetime import date
from typing import Any, Dict, List
from ecofinance.domain.models import RawRow
from ecofinance.domain.exceptions import BankAPIError
from ecofinance.config import settings


def to_raw_row(txn: Dict[str, Any]) -> RawRow:
    """Convert an aggregator transaction into the upload row shape"""
    categories = txn.get("category") or []
    return RawRow(
        date=txn["date"],
        merchant=txn.get("merchant_name") or txn["name"],
        category=categories[0] if categories else "Unknown",
        amount=str(txn["amount"]),
    )


class BankClient:
    """Client for a Plaid-compatible transactions API"""

    def __init__(
        self,
        base_url: str | None = None,
        client_id: str | None = None,
        secret: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.bank_api_base
        self.client_id = client_id or settings.bank_client_id
        self.secret = secret or settings.bank_secret
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
        count: int = 100,
        offset: int = 0,
    ) -> List[RawRow]:
        """
        Fetch transactions between two dates as RawRow records.

        Raises:
            BankAPIError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(
                    f"{self.base_url}/transactions/get",
                    json={
                        "client_id": self.client_id,
                        "secret": self.secret,
                        "access_token": access_token,
                        "start_date": start_date.isoformat(),
                        "end_date": end_date.isoformat(),
                        "options": {"count": count, "offset": offset},
                    },
                )
                response.raise_for_status()
                data = response.json()

                return [to_raw_row(txn) for txn in data.get("transactions", [])]

            except httpx.TimeoutException as e:
                raise BankAPIError(f"Bank API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise BankAPIError(f"Bank API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise BankAPIError(f"Bank API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise BankAPIError(f"Invalid transaction data from bank: {e}") from e
