"""Roles module - named capability bundles assigned to users."""

from fastapi import APIRouter


router = APIRouter(prefix="/roles", tags=["roles"])

from journal.modules.roles import routes  # noqa: F401, E402
