from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .settings import get_settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised for any non-2xx response from the worker."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"API Error: {status_code} - {body}")
        self.status_code = status_code
        self.body = body


# PUBLIC_INTERFACE
class ApiClient:
    """
    Thin JSON client for the worker API.

    No retries, caching or request deduplication: each call is one request
    and a non-2xx status raises ApiError.

    Args:
        base_url: API root. Defaults to API_URL from settings.
        http: Optional httpx.Client to send requests with. When omitted the
            client creates (and owns) its own.
        timeout: Request timeout in seconds for an owned client.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = (base_url if base_url is not None else get_settings().api_url).rstrip("/")
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(timeout=timeout)
        self._headers: Dict[str, str] = {"Content-Type": "application/json"}

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._headers)

    # PUBLIC_INTERFACE
    def set_auth_token(self, token: str) -> None:
        """Send `Authorization: Bearer <token>` with every later request."""
        self._headers = {**self._headers, "Authorization": f"Bearer {token}"}

    def _request(self, method: str, endpoint: str, data: Any = None) -> Any:
        url = f"{self.base_url}{endpoint}"
        kwargs: Dict[str, Any] = {"headers": self._headers}
        if data is not None:
            kwargs["json"] = data
        response = self._http.request(method, url, **kwargs)
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Any:
        if not response.is_success:
            logger.debug("%s %s -> %s", response.request.method, response.request.url, response.status_code)
            raise ApiError(response.status_code, response.text)
        return response.json()

    def check_health(self) -> Dict[str, Any]:
        return self.get("/api/health")

    def get(self, endpoint: str) -> Any:
        return self._request("GET", endpoint)

    def post(self, endpoint: str, data: Any) -> Any:
        return self._request("POST", endpoint, data)

    def put(self, endpoint: str, data: Any) -> Any:
        return self._request("PUT", endpoint, data)

    def delete(self, endpoint: str) -> Any:
        return self._request("DELETE", endpoint)

    # Todo endpoints

    def list_todos(self, completed: Optional[bool] = None) -> List[Dict[str, Any]]:
        endpoint = "/api/todos"
        if completed is not None:
            endpoint += f"?completed={'true' if completed else 'false'}"
        return self.get(endpoint)

    def create_todo(self, text: str) -> Dict[str, Any]:
        return self.post("/api/todos", {"text": text})

    def update_todo(
        self, todo_id: int, text: Optional[str] = None, completed: Optional[bool] = None
    ) -> Dict[str, Any]:
        """Send only the fields that are given."""
        body: Dict[str, Any] = {}
        if text is not None:
            body["text"] = text
        if completed is not None:
            body["completed"] = completed
        return self.put(f"/api/todos/{todo_id}", body)

    def delete_todo(self, todo_id: int) -> Dict[str, Any]:
        return self.delete(f"/api/todos/{todo_id}")
