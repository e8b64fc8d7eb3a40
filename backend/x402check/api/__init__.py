"""API route definitions for x402check."""

from fastapi import APIRouter

from .validation import router as validation_router


api_router = APIRouter()
api_router.include_router(validation_router)


__all__ = ["api_router"]
