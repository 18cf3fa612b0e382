"""Notifications module - helpers for notification content."""

from fastapi import APIRouter


router = APIRouter(prefix="/notifications", tags=["notifications"])

from journal.modules.notifications import routes  # noqa: F401, E402
