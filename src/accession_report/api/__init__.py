"""API layer: canonical surface for generating and exporting the report.

This module provides the stable read model API. Key rules:

1. No runtime SQLAlchemy imports - only call repo functions
2. Return Pydantic models or plain export payloads only
"""
