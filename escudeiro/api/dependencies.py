"""
Dependencies
============

FastAPI dependencies exposing the objects created by the application lifespan.
"""

from typing import Optional

from fastapi import Request

from escudeiro.config.settings import Settings
from escudeiro.core.exceptions import ConfigurationError
from escudeiro.core.filesystem.web_root import WebRoot
from escudeiro.core.php.executor import PHPExecutor
from escudeiro.core.proxy import ReverseProxyClient


def get_current_settings(request: Request) -> Settings:
    """Dependency to get the application's settings."""
    return request.app.state.settings


def get_web_root(request: Request) -> WebRoot:
    """Dependency to get the served web root."""
    web_root: Optional[WebRoot] = getattr(request.app.state, "web_root", None)
    if web_root is None:
        raise ConfigurationError("Web root is not initialized")
    return web_root


def get_php_executor(request: Request) -> PHPExecutor:
    """Dependency to get the PHP executor."""
    return request.app.state.php_executor


def get_proxy_client(request: Request) -> Optional[ReverseProxyClient]:
    """Dependency to get the reverse proxy client, if the proxy is enabled."""
    return getattr(request.app.state, "proxy_client", None)
