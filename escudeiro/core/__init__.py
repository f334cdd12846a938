"""
Core Business Logic
==================

Core functionality for page rendering, web root access and PHP execution.

Modules:
- rendering: Jinja2 rendering of the Squire's Page and directory listings
- filesystem: Path resolution and directory listing inside the web root
- php: PHP interpreter subprocess execution
- proxy: aiohttp client for the /api/ reverse proxy
- exceptions: Errors translated into HTTP responses by the API
"""
