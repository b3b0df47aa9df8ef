"""
Version 1 of the API.

Bundles the event and team endpoints.  Breaking changes should be
introduced in a new version subpackage (e.g. ``v2``).
"""
