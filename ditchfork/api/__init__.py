"""Router aggregator."""
from fastapi import APIRouter

from ditchfork.api.routes import admin, auth, public, setup

site_router = APIRouter()
site_router.include_router(public.router)
site_router.include_router(setup.router)
site_router.include_router(auth.router)
site_router.include_router(admin.router)

__all__ = ["site_router"]
