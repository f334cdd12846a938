"""
Test Suite
==========

Test suite matching the escudeiro/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: HTTP-level tests through the FastAPI application
"""
