"""Data Interface API Router - aggregates all API routes."""

from fastapi import APIRouter

from data_interface.api import auth, protected, public

# Main API router - all routes will be prefixed with /api
api_router = APIRouter(prefix="/api")

api_router.include_router(auth.router)
api_router.include_router(protected.router)
api_router.include_router(public.router)
