"""Article API schemas."""

from datetime import date

from pydantic import BaseModel

from journal.modules.articles.citations import ArticleCitationInfo, CitationStyle


class CitationRequest(BaseModel):
    """Schema for requesting citations of an article.

    Without a style every supported style is returned.
    """

    article: ArticleCitationInfo
    style: CitationStyle | None = None
    accessed: date | None = None


class CitationResponse(BaseModel):
    citations: dict[CitationStyle, str]
