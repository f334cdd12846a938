"""
File Routes
===========

FastAPI routes for serving files from the web root.

Directories are served through their index.html or index.php when present
and listed otherwise. PHP scripts are executed and their output returned.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, HTMLResponse, RedirectResponse, Response

from escudeiro.api.dependencies import get_php_executor, get_web_root
from escudeiro.config.logging import get_logger
from escudeiro.core.filesystem.web_root import WebRoot
from escudeiro.core.php.executor import PHPExecutor
from escudeiro.core.rendering.page_renderer import render_directory_listing

logger = get_logger(__name__)

router = APIRouter(tags=["Files"])


def directory_redirect(request: Request) -> RedirectResponse:
    """Redirect a directory URL to its trailing-slash form so relative links resolve."""
    url = request.url.replace(path=request.url.path + "/")
    return RedirectResponse(url=str(url), status_code=301)


def list_directory(web_root: WebRoot, relative_path: str) -> HTMLResponse:
    """Render the listing of a directory inside the web root."""
    listing = web_root.list_directory(relative_path)
    html = render_directory_listing(listing)
    logger.info("Directory rendered", path=listing.current_path, entries=len(listing.entries))
    return HTMLResponse(content=html)


async def serve_path(
    request: Request,
    relative_path: str,
    web_root: WebRoot,
    php_executor: PHPExecutor,
) -> Response:
    """
    Serve a path inside the web root.

    Args:
        request: Incoming request
        relative_path: Path relative to the web root
        web_root: Served directory
        php_executor: Executor for .php scripts

    Returns:
        File contents, PHP output or a directory listing
    """
    path: Path = web_root.resolve_existing(relative_path)

    if path.is_dir():
        if not request.url.path.endswith("/"):
            return directory_redirect(request)

        index = web_root.find_index(path)
        if index is None:
            return list_directory(web_root, relative_path)

        logger.info("Serving directory index", index=str(index))
        path = index

    if path.suffix.lower() == ".php":
        output = await php_executor.run(path)
        logger.info("PHP output served", script=str(path))
        return HTMLResponse(content=output)

    logger.info("Serving file", path=str(path))
    return FileResponse(path)


@router.get("/files/{file_path:path}")
async def serve_file(
    request: Request,
    file_path: str,
    web_root: WebRoot = Depends(get_web_root),
    php_executor: PHPExecutor = Depends(get_php_executor),
) -> Response:
    """Serve a file or directory from the web root."""
    logger.info("File requested", path=file_path)
    return await serve_path(request, file_path, web_root, php_executor)
