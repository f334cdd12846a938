"""
Escudeiro
=========

A small HTTP server for browsing and serving a local web root.

This package provides:
- Directory listings rendered with Jinja2
- Static file serving with PHP script execution
- An optional reverse proxy for /api/ requests
- The Squire's Page renderer
"""

__version__ = "1.0.0"
__author__ = "Escudeiro Team"
