"""Review Engine - API Routers"""
from .reviews import router as reviews_router

__all__ = [
    "reviews_router",
]
