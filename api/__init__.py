"""HTTP routers exposed by the FastAPI application."""

from .ia import router as ia_router

__all__ = ["ia_router"]
