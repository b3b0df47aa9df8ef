"""
Top‑level package for the Nuleaf API.

All functionality lives in submodules under ``app``; run the service
with ``uvicorn nuleaf_api.app.main:app``.
"""

__all__ = []
