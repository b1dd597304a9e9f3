"""
Domain models and API schemas.

Dependencies: pydantic
System role: Typed contracts shared across layers
"""

from draftmind.models.chunk import Chunk

__all__ = ["Chunk"]
