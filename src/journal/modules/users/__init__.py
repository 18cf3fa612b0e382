"""Users module - administrator accounts, their role and direct permissions."""

from fastapi import APIRouter


router = APIRouter(prefix="/users", tags=["users"])

from journal.modules.users import routes  # noqa: F401, E402
