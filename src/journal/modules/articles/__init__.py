"""Articles module - publishing helpers for journal articles."""

from fastapi import APIRouter


router = APIRouter(prefix="/articles", tags=["articles"])

from journal.modules.articles import routes  # noqa: F401, E402
