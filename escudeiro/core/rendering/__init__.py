"""
Rendering
=========

Jinja2 rendering of the Squire's Page and directory listing documents.
"""
