"""
API layer for MockPrep

Contains FastAPI routers for:
- Interview setup (question generation, voice assistant config)
- Feedback generation and retrieval
"""

from mockprep.api.router import api_router

__all__ = ["api_router"]
