"""
Command Line Interface
======================

Usage:
    python -m escudeiro serve [--host HOST] [--port PORT] [--reload]
    python -m escudeiro render [--output PATH]
"""

import argparse
import sys
from typing import List, Optional

from escudeiro.config.logging import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="escudeiro", description="Escudeiro web root server")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP server")
    serve.add_argument("--host", default=None, help="Bind address (default: SERVER_HOST)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: SERVER_PORT)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    render = subparsers.add_parser("render", help="Render the Squire's Page")
    render.add_argument("--output", "-o", default=None, help="Output file (default: stdout)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        from escudeiro.api.main import run_server

        run_server(host=args.host, port=args.port, reload=args.reload)
        return 0

    from escudeiro.core.rendering.page_renderer import render_squire_page, write_squire_page

    if args.output:
        write_squire_page(args.output)
    else:
        sys.stdout.write(render_squire_page())
    return 0


if __name__ == "__main__":
    sys.exit(main())
