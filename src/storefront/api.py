"""HTTP client for the Qahwa API.

Parses error responses into readable messages. Handles two response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Domain errors (400/404/409): {"error": "msg"} or {"error": {"field": ["msg"]}}, or {"detail": "msg"}
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

import requests
import structlog

from storefront.errors import ApiError, ServiceUnavailable

if TYPE_CHECKING:
    from requests import Response

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Gracefully handles unparseable bodies and missing fields.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON: return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    # Pydantic validation errors: {"detail": [{"loc": [...], "msg": "..."}]}
    if "detail" in body and isinstance(body["detail"], list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    # Domain errors: {"error": "msg"} or {"error": {"field": ["msg"]}}
    if "error" in body:
        error = body["error"]
        if isinstance(error, dict):
            return " | ".join(
                f"{k}: {'; '.join(str(m) for m in v) if isinstance(v, list) else v}" for k, v in error.items()
            )
        return str(error)

    if "detail" in body:
        return str(body["detail"])

    # Unknown shape: stringify and truncate
    return str(body)[:300]


class StorefrontApi:
    """Thin wrapper over the REST endpoints the storefront uses.

    ``http`` is anything with a requests-style ``request()`` method; a
    ``requests.Session`` is created when none is given.
    """

    def __init__(self, base_url: str | None = None, http: Any = None, timeout: float = 10.0):
        self.base_url = (base_url if base_url is not None else os.environ.get("QAHWA_API_URL", DEFAULT_API_URL)).rstrip(
            "/"
        )
        self.http = http if http is not None else requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, json: Any = None, params: dict | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(method, url, json=json, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("API unreachable", method=method, path=path, error=str(exc))
            raise ServiceUnavailable(f"Could not reach {url}") from exc

        if response.status_code >= 500:
            logger.error("API failure", method=method, path=path, status=response.status_code)
            raise ServiceUnavailable(extract_error_detail(response))
        if response.status_code >= 400:
            detail = extract_error_detail(response)
            logger.info("API refused request", method=method, path=path, status=response.status_code, detail=detail)
            raise ApiError(response.status_code, detail)

        return response.json() if response.content else None

    # --- Menu ---

    def menu_items(self, item_ids=None) -> list[dict]:
        params = {"ids": ",".join(item_ids)} if item_ids else None
        return self._request("GET", "/menu-items", params=params)["items"]

    # --- Cart ---

    def get_cart(self, session_id: str) -> dict:
        return self._request("GET", f"/cart/{session_id}")

    def add_to_cart(self, session_id: str, item_id: str, quantity: int) -> dict:
        return self._request(
            "POST", "/cart", json={"session_id": session_id, "item_id": item_id, "quantity": quantity}
        )

    def set_cart_quantity(self, session_id: str, item_id: str, quantity: int) -> dict:
        return self._request("PUT", f"/cart/{session_id}/{item_id}", json={"quantity": quantity})

    def remove_from_cart(self, session_id: str, item_id: str) -> dict:
        return self._request("DELETE", f"/cart/{session_id}/{item_id}")

    def clear_cart(self, session_id: str) -> dict:
        return self._request("DELETE", f"/cart/{session_id}")

    # --- Orders ---

    def place_order(self, payload: dict) -> dict:
        return self._request("POST", "/orders", json=payload)

    def get_order(self, order_id: str) -> dict:
        return self._request("GET", f"/orders/{order_id}")

    def customer_orders(self, customer_id: str) -> list[dict]:
        return self._request("GET", f"/customers/{customer_id}/orders")["orders"]

    def session_orders(self, session_id: str) -> list[dict]:
        return self._request("GET", f"/sessions/{session_id}/orders")["orders"]

    # --- Loyalty ---

    def register_customer(self, name: str, phone: str) -> dict:
        return self._request("POST", "/customers", json={"name": name, "phone": phone})

    def get_customer(self, customer_id: str) -> dict:
        return self._request("GET", f"/customers/{customer_id}")

    def find_customer(self, phone: str) -> dict:
        return self._request("GET", "/customers", params={"phone": phone})

    def redeem_free_drink(self, customer_id: str) -> dict:
        return self._request("POST", f"/customers/{customer_id}/free-drinks/redeem")
