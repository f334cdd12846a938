"""
Data Models
===========

Pydantic models for rendered pages, directory listings and API responses.
"""
