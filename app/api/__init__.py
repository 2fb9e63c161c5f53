"""
API Package

This package contains the HTTP route handlers:
- review: code review / casual reply endpoint
- users: signup, login and user administration
"""

from app.api.review import router as review_router
from app.api.users import router as users_router

__all__ = ["review_router", "users_router"]
