"""
Pydantic schema definitions for API payloads and query criteria.

Schemas are separated from the DAOs to decouple the API
representation from persistence.
"""
