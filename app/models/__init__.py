# app/models/__init__.py
"""Request and response schemas for the HTTP API."""
