"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides a temporary web root, test settings and FastAPI test clients.
"""

import os

# Settings are read on first import of the package; keep tests off the log files.
os.environ["ENVIRONMENT"] = "testing"
os.environ.setdefault("LOG_LEVEL", "INFO")

import sys
from pathlib import Path
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from escudeiro.api.main import create_app
from escudeiro.config.settings import Settings

# Stand-in interpreter: the .php fixtures below are Python programs, so the
# PHP executor can run real subprocesses without a PHP installation.
FAKE_PHP = sys.executable

PHP_PAGE = 'print("<p class=\'php-output\'>Hello from PHP</p>")\n'
PHP_INDEX = 'print("<h1>App index</h1>")\n'
PHP_FAILING = 'import sys\nsys.stderr.write("Parse error")\nsys.exit(255)\n'


def build_web_root(root: Path) -> Path:
    """Create a small web root with files, subdirectories and index pages."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "readme.txt").write_text("Escudeiro test root\n", encoding="utf-8")
    (root / "notes with space.txt").write_text("spaced\n", encoding="utf-8")
    (root / "page.php").write_text(PHP_PAGE, encoding="utf-8")
    (root / "broken.php").write_text(PHP_FAILING, encoding="utf-8")

    docs = root / "docs"
    docs.mkdir()
    (docs / "guide.md").write_text("# Guide\n", encoding="utf-8")
    (docs / "nested").mkdir()

    site = root / "site"
    site.mkdir()
    (site / "index.html").write_text("<h1>Static site</h1>", encoding="utf-8")
    (site / "index.php").write_text(PHP_INDEX, encoding="utf-8")

    app_dir = root / "app"
    app_dir.mkdir()
    (app_dir / "index.php").write_text(PHP_INDEX, encoding="utf-8")

    (root / "empty").mkdir()
    return root


@pytest.fixture
def web_root_dir(tmp_path: Path) -> Path:
    """Temporary web root populated with test files."""
    return build_web_root(tmp_path / "www")


@pytest.fixture
def test_settings(web_root_dir: Path) -> Settings:
    """Test settings pointing at the temporary web root."""
    return Settings(
        environment="testing",
        debug=True,
        web_root=web_root_dir,
        php_binary=FAKE_PHP,
        php_timeout=10.0,
        proxy_target=None,
        log_level="DEBUG",
    )


@pytest.fixture
def proxy_settings(test_settings: Settings) -> Settings:
    """Test settings with the reverse proxy enabled."""
    return test_settings.model_copy(update={"proxy_target": "http://backend.test:3000"})


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """FastAPI application for the temporary web root."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """FastAPI test client with the application lifespan running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def proxy_client(proxy_settings: Settings) -> Generator[TestClient, None, None]:
    """FastAPI test client for an application with the proxy enabled."""
    with TestClient(create_app(proxy_settings)) as test_client:
        yield test_client
