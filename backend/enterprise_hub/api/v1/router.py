"""
Main API v1 router.
"""
from fastapi import APIRouter

from . import businesses

router = APIRouter()

router.include_router(businesses.router, prefix="/businesses", tags=["businesses"])
