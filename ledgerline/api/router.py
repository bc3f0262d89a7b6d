"""
Main API router.
"""

from fastapi import APIRouter
from ledgerline.api import analytics, categories, items

api_router = APIRouter()

api_router.include_router(categories.router)
api_router.include_router(items.router)
api_router.include_router(analytics.router)
