"""
reqbind.observability

Observability package.

Responsibilities:
- Structured logging configuration and logger access.
"""

# Package marker.
