"""
Account Service Domain Entities

All domain entities organized by model.
"""

from .user import User

__all__ = [
    "User",
]
