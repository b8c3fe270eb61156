"""
API Router.

Aggregates all resource routers. Mounted under `api_prefix` from
application.yaml.
"""

from fastapi import APIRouter

from thinkspace.backend.api.routes import notes

router = APIRouter()

router.include_router(notes.router, prefix="/notes", tags=["notes"])
