"""
FastAPI HTTP Server
===================

HTTP endpoints for browsing and serving the web root.

Endpoints:
- GET /: Directory listing of the web root and its subdirectories
- GET /files/{path}: Serve a file, running .php scripts through PHP
- GET /squire: The Squire's Page
- ANY /api/{path}: Reverse proxy to PROXY_TARGET, when configured
- GET /health: Health check endpoint
"""
