"""Async HTTP client for the documents service.

Used by the editor and by scripts. It talks either to the session gateway
(bearer token, ``/api`` prefix) or directly to the documents service with the
principal header, and turns every non-2xx answer into ``ApiError``.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised for any non-2xx response.

    Attributes:
        status_code (int): HTTP status of the response.
        message (str): The server's ``detail``, suitable for inline display.
        error_code (str, optional): Category reported by the server.
    """

    def __init__(
        self, status_code: int, message: str, error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.error_code = error_code


class DocumentsClient:
    """Thin wrapper around ``httpx.AsyncClient`` exposing every endpoint.

    Example:
        >>> async with DocumentsClient("http://localhost:8000", token=jwt) as api:
        ...     doc = await api.create_document("Notes")
        ...     await api.share_document(doc["id"], "bob@example.com", can_edit=True)
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        email: Optional[str] = None,
        api_prefix: str = "",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        headers = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if email:
            headers["X-User-Email"] = email

        self._prefix = api_prefix.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url, headers=headers, transport=transport, timeout=timeout
        )

    async def __aenter__(self) -> "DocumentsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        response = await self._client.request(method, f"{self._prefix}{path}", **kwargs)

        if response.is_success:
            return response.json()

        message = response.reason_phrase or "Something went wrong"
        error_code = None
        try:
            body = response.json()
            if isinstance(body, dict):
                message = str(body.get("detail") or message)
                error_code = body.get("error_code")
        except ValueError:
            pass

        logger.warning(f"{method} {path} failed with {response.status_code}: {message}")
        raise ApiError(response.status_code, message, error_code)

    # Users

    async def register(self, name: str = "") -> Dict[str, Any]:
        return await self._request("POST", "/users", json={"name": name})

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/users/me")

    # Documents

    async def list_documents(self) -> Dict[str, List[Dict[str, Any]]]:
        """Return ``{"owned_documents": [...], "shared_documents": [...]}``."""
        return await self._request("GET", "/documents")

    async def create_document(
        self, title: str, content: Optional[str] = None
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", "/documents", json={"title": title, "content": content}
        )

    async def get_document(self, document_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/documents/{document_id}")

    async def update_document(
        self, document_id: str, title: str, content: Optional[str] = None
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"title": title}
        if content is not None:
            payload["content"] = content
        return await self._request("PUT", f"/documents/{document_id}", json=payload)

    async def delete_document(self, document_id: str) -> str:
        body = await self._request("DELETE", f"/documents/{document_id}")
        return body["message"]

    # Shares

    async def share_document(
        self, document_id: str, email: str, can_edit: bool = False
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/documents/{document_id}/share",
            json={"email": email, "can_edit": can_edit},
        )

    async def list_shares(self, document_id: str) -> List[Dict[str, Any]]:
        return await self._request("GET", f"/documents/{document_id}/shares")

    async def update_share(
        self, document_id: str, email: str, can_edit: bool
    ) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            f"/documents/{document_id}/shares/by-email/{email}",
            json={"can_edit": can_edit},
        )

    async def unshare_document(self, document_id: str, email: str) -> str:
        body = await self._request(
            "DELETE", f"/documents/{document_id}/shares/by-email/{email}"
        )
        return body["message"]
