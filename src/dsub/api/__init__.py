"""DSUB API package."""

from dsub.api.routes import router

__all__ = ["router"]
