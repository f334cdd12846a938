"""
Page Renderer
=============

Render the Squire's Page and directory listings with Jinja2 templates.
Rendering is synchronous and deterministic: the same input always yields the
same bytes.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Union

import jinja2

from escudeiro.config.logging import get_logger
from escudeiro.core.exceptions import PageRenderingError
from escudeiro.models.schemas import ClickBinding, DirectoryListing, SquirePage

logger = get_logger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

SQUIRE_DESCRIPTION = (
    "Squires are young noblemen serving as an attendant to a knight "
    "before becoming a knight themselves."
)
SQUIRE_ALERT_MESSAGE = (
    "Squires were essential in medieval times, assisting knights "
    "and learning the art of combat."
)
SQUIRE_BUTTON_ID = "myButton"

BOOTSTRAP_CSS = "https://stackpath.bootstrapcdn.com/bootstrap/4.5.2/css/bootstrap.min.css"
JQUERY_JS = "https://code.jquery.com/jquery-3.5.1.slim.min.js"
POPPER_JS = "https://cdn.jsdelivr.net/npm/@popperjs/core@2.5.4/dist/umd/popper.min.js"
BOOTSTRAP_JS = "https://stackpath.bootstrapcdn.com/bootstrap/4.5.2/js/bootstrap.min.js"

SQUIRE_PAGE = SquirePage(
    description=SQUIRE_DESCRIPTION,
    binding=ClickBinding(target_id=SQUIRE_BUTTON_ID, alert_message=SQUIRE_ALERT_MESSAGE),
    stylesheets=[BOOTSTRAP_CSS],
    scripts=[JQUERY_JS, POPPER_JS, BOOTSTRAP_JS],
)


class Jinja2PageRenderer:
    """Jinja2-based renderer for the server's HTML documents."""

    def __init__(self, template_dir: Path = TEMPLATE_DIR) -> None:
        self.logger: Any = logger.bind(renderer="jinja2")
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
            undefined=jinja2.StrictUndefined,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Template filename inside the template directory
            context: Template variables

        Returns:
            Rendered HTML string

        Raises:
            PageRenderingError: If the template is missing or fails to render
        """
        try:
            template = self.env.get_template(template_name)
            html = template.render(**context)
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("Page rendering failed", template=template_name, error=error_msg)
            raise PageRenderingError(error_msg) from e

        self.logger.debug("Page rendered", template=template_name, html_length=len(html))
        return html

    def render_squire_page(self, page: SquirePage = SQUIRE_PAGE) -> str:
        """Render the Squire's Page document."""
        return self.render("squire.html", {"page": page})

    def render_directory(self, listing: DirectoryListing) -> str:
        """Render a directory listing document."""
        return self.render("directory.html", {"listing": listing})


@lru_cache(maxsize=1)
def get_renderer() -> Jinja2PageRenderer:
    """Get the shared renderer instance."""
    return Jinja2PageRenderer()


def render_squire_page() -> str:
    """Render the Squire's Page with its fixed content."""
    return get_renderer().render_squire_page()


def write_squire_page(path: Union[str, Path]) -> Path:
    """
    Render the Squire's Page at build time and write it to a file.

    Args:
        path: Destination file; parent directories are created

    Returns:
        The path written
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(render_squire_page().encode("utf-8"))
    logger.info("Squire's Page written", path=str(target))
    return target


def render_directory_listing(listing: DirectoryListing) -> str:
    """Render a directory listing document."""
    return get_renderer().render_directory(listing)
