"""
Proxy Routes
============

Reverse proxy for /api/ requests. Included only when PROXY_TARGET is set.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from escudeiro.api.dependencies import get_proxy_client
from escudeiro.config.logging import get_logger
from escudeiro.core.exceptions import ProxyError
from escudeiro.core.proxy import ReverseProxyClient

logger = get_logger(__name__)

router = APIRouter(tags=["Proxy"])

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("/api/{api_path:path}", methods=PROXY_METHODS)
async def proxy_api(
    request: Request,
    api_path: str,
    client: Optional[ReverseProxyClient] = Depends(get_proxy_client),
) -> Response:
    """Forward the request to the configured backend and relay its response."""
    if client is None:
        raise ProxyError("Proxy client is not initialized")

    raw_path = request.scope.get("raw_path")
    # Keep percent-encoded reserved characters such as %2F intact
    path = raw_path.decode("latin-1") if raw_path else request.url.path

    upstream = await client.forward(
        method=request.method,
        path=path,
        query=request.query_params.multi_items(),
        headers=request.headers,
        body=await request.body(),
        client_host=request.client.host if request.client else None,
    )

    response = Response(content=upstream.body, status_code=upstream.status)
    for key, value in upstream.headers:
        response.headers.append(key, value)

    logger.info("Proxy response relayed", path=api_path, status=upstream.status)
    return response
