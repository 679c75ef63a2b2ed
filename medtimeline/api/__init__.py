# API Routers
from .timeline import router as timeline_router

__all__ = ['timeline_router']
