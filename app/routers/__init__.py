"""
API Routers
Separate router modules for each domain.
"""

from app.routers import explore

__all__ = ["explore"]
