import logging
import os
from typing import AsyncGenerator

import httpx
import jwt
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jwt import PyJWKClient

# Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DOCUMENTS_SERVICE_URL = os.getenv("DOCUMENTS_SERVICE_URL", "http://localhost:8002")
JWT_SECRET = os.getenv("JWT_SECRET", "mini-notion-development-secret-change-me")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
# When set, tokens are RS256 and keys come from the identity provider
JWKS_URL = os.getenv("JWKS_URL", "")

USER_EMAIL_HEADER = "X-User-Email"
USER_NAME_HEADER = "X-User-Name"

logging.basicConfig(level=getattr(logging, LOG_LEVEL))
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Mini-Notion Session Gateway",
    description="Verifies sessions and forwards requests to the documents service",
    version="1.0.0",
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Headers never forwarded upstream, identity headers included so clients
# cannot impersonate another user
_DROPPED_REQUEST_HEADERS = {
    "host",
    "content-length",
    "authorization",
    USER_EMAIL_HEADER.lower(),
    USER_NAME_HEADER.lower(),
}
_DROPPED_RESPONSE_HEADERS = {"content-length", "content-encoding", "transfer-encoding"}

security = HTTPBearer(auto_error=False)
_jwks_client = PyJWKClient(JWKS_URL) if JWKS_URL else None


async def get_http_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield the HTTP client used to reach the documents service."""
    async with httpx.AsyncClient(
        base_url=DOCUMENTS_SERVICE_URL, timeout=30.0
    ) as client:
        yield client


def decode_token(token: str) -> dict:
    """Verify a session token and return its claims.

    Raises:
        jwt.PyJWTError: If the signature, expiry or format is invalid.
    """
    if _jwks_client is not None:
        signing_key = _jwks_client.get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            options={"verify_aud": False},
        )
    return jwt.decode(
        token, JWT_SECRET, algorithms=[JWT_ALGORITHM], options={"verify_aud": False}
    )


async def verify_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Verify the bearer token of the request."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        return decode_token(credentials.credentials)
    except jwt.PyJWTError as e:
        logger.warning(f"Token verification failed: {e}")
        raise HTTPException(status_code=401, detail="Invalid token") from e


async def get_current_user(payload: dict = Depends(verify_token)) -> dict:
    """Extract user info from verified token"""
    email = payload.get("email")
    if not email:
        raise HTTPException(status_code=401, detail="Token carries no email")
    return {"email": email, "name": payload.get("name") or ""}


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "session-gateway"}


async def proxy_request(
    request: Request,
    backend_path: str,
    user: dict,
    client: httpx.AsyncClient,
) -> Response:
    """Forward a request to the documents service on behalf of a user."""
    headers = {
        key: value
        for key, value in request.headers.items()
        if key.lower() not in _DROPPED_REQUEST_HEADERS
    }
    headers[USER_EMAIL_HEADER] = user["email"]
    headers[USER_NAME_HEADER] = user["name"]

    body = await request.body()

    try:
        response = await client.request(
            method=request.method,
            url=backend_path,
            params=list(request.query_params.multi_items()),
            headers=headers,
            content=body,
        )
    except httpx.HTTPError as e:
        logger.error(f"Proxy error for {request.method} {backend_path}: {e}")
        raise HTTPException(
            status_code=502, detail="Documents service unavailable"
        ) from e

    response_headers = {
        key: value
        for key, value in response.headers.items()
        if key.lower() not in _DROPPED_RESPONSE_HEADERS
    }

    if response.headers.get("content-type", "").startswith("application/json"):
        return JSONResponse(
            status_code=response.status_code,
            content=response.json(),
            headers=response_headers,
        )
    return Response(
        status_code=response.status_code,
        content=response.content,
        headers=response_headers,
    )


@app.api_route("/api/{path:path}", methods=["GET", "POST", "PUT", "DELETE"])
async def documents_proxy(
    request: Request,
    path: str,
    user: dict = Depends(get_current_user),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    return await proxy_request(request, f"/{path}", user, client)
