"""Article API routes."""

from typing import Annotated

from fastapi import Depends

from journal.core.permissions import AuthUser
from journal.core.permissions.dependencies import require_permission
from journal.modules.articles import router
from journal.modules.articles.citations import format_all_citations, format_citation
from journal.modules.articles.schemas import CitationRequest, CitationResponse


CanReadArticles = Annotated[AuthUser, Depends(require_permission("article.READ"))]


@router.post(
    "/citations",
    response_model=CitationResponse,
    summary="Format article citations",
    description="Citations in one style, or in every supported style.",
)
async def format_citations(
    data: CitationRequest,
    current_user: CanReadArticles,  # noqa: ARG001
) -> CitationResponse:
    if data.style is None:
        citations = format_all_citations(data.article, accessed=data.accessed)
    else:
        citation = format_citation(data.article, data.style, accessed=data.accessed)
        citations = {data.style: citation}
    return CitationResponse(citations=citations)
