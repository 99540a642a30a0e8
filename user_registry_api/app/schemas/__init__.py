"""
Pydantic schema definitions for API payloads.

Schemas are separated from the stored documents so that the API
representation (``id``/``name``/``image``) stays decoupled from the
collection layout (``_id``/``user``).
"""
