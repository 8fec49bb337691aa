"""
Response dispatch: category -> generator tables.
"""

from .dispatcher import Generator, RenderRequest, ResponseDispatcher, constant

__all__ = ["Generator", "RenderRequest", "ResponseDispatcher", "constant"]
