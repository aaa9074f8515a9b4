"""
Application package of the comment board service.

The service is organised into ``core`` (configuration, logging,
database helpers, errors), ``stores`` (relational and in‑memory
persistence), ``services`` (validation and business rules),
``schemas`` (API payloads) and ``api`` (routers).
"""

from .main import app  # noqa: F401
