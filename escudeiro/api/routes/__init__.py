"""
API Routes
==========

Routers included by the application factory. The directory listing router
holds a catch-all path and must be included last.
"""
