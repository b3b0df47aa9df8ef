"""
Application package initializer.

The API is organised into the HTTP layer (``api``), data-access objects
(``dao``), schemas and shared ``core`` pieces (settings, logging,
database wiring, error kinds).
"""

from .main import app  # noqa: F401
