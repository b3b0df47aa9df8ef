"""
Shared building blocks: settings, logging, database wiring and error kinds.
"""
