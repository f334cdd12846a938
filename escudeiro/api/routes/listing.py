"""
Directory Listing Routes
========================

Catch-all FastAPI routes that list directories of the web root.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, Response

from escudeiro.api.dependencies import get_php_executor, get_web_root
from escudeiro.api.routes.files import directory_redirect, list_directory, serve_path
from escudeiro.config.logging import get_logger
from escudeiro.core.filesystem.web_root import WebRoot
from escudeiro.core.php.executor import PHPExecutor

logger = get_logger(__name__)

router = APIRouter(tags=["Listing"])


@router.get("/", response_class=HTMLResponse)
async def browse_root(web_root: WebRoot = Depends(get_web_root)) -> HTMLResponse:
    """List the top level of the web root."""
    logger.info("Directory listing requested", path="/")
    return list_directory(web_root, "")


@router.get("/{dir_path:path}")
async def browse(
    request: Request,
    dir_path: str,
    web_root: WebRoot = Depends(get_web_root),
    php_executor: PHPExecutor = Depends(get_php_executor),
) -> Response:
    """
    List a directory of the web root.

    Directories are always listed here, even when they hold an index page;
    paths naming a file are served as /files/ would serve them.
    """
    path = web_root.resolve_existing(dir_path)
    if not path.is_dir():
        return await serve_path(request, dir_path, web_root, php_executor)

    if not request.url.path.endswith("/"):
        return directory_redirect(request)

    logger.info("Directory listing requested", path=dir_path)
    return list_directory(web_root, dir_path)
