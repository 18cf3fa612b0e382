"""Citation formatting for published articles.

Six styles are supported. Each shortens long author lists its own way and
prefers the DOI over the article's page on the journal site.
"""

from collections.abc import Callable
from datetime import UTC, date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from journal.config import settings


class CitationStyle(StrEnum):
    APA = "APA"
    MLA = "MLA"
    CHICAGO = "Chicago"
    HARVARD = "Harvard"
    BLUEBOOK = "Bluebook"
    OSCOLA = "OSCOLA"


UNKNOWN_AUTHOR = "Unknown Author"

# Bluebook month abbreviations (T12)
_BLUEBOOK_MONTHS = (
    "Jan.", "Feb.", "Mar.", "Apr.", "May", "June",
    "July", "Aug.", "Sept.", "Oct.", "Nov.", "Dec.",
)  # fmt: skip


class JournalInfo(BaseModel):
    """The publishing journal as it appears in citations."""

    model_config = ConfigDict(frozen=True)

    name: str
    abbreviation: str
    site_url: str

    @classmethod
    def from_settings(cls) -> "JournalInfo":
        return cls(
            name=settings.journal_name,
            abbreviation=settings.journal_abbreviation,
            site_url=settings.site_url.rstrip("/"),
        )


class ArticleCitationInfo(BaseModel):
    """The article fields a citation needs.

    Attributes:
        title: Article title
        slug: URL slug on the journal site
        authors: Author full names in byline order
        published: Publication date
        doi: DOI without the resolver prefix
        volume: Journal volume, defaults to 1 in OSCOLA
        issue: Journal issue, defaults to 1 in OSCOLA
    """

    model_config = ConfigDict(frozen=True)

    title: str
    slug: str
    authors: list[str] = Field(default_factory=list)
    published: date
    doi: str | None = None
    volume: int | None = None
    issue: int | None = None


class _Name:
    """First and last name split from a display name."""

    def __init__(self, full_name: str) -> None:
        parts = full_name.split()
        self.full = " ".join(parts)
        self.first = parts[0] if parts else ""
        self.last = parts[-1] if parts else ""

    @property
    def initial(self) -> str:
        return f"{self.first[:1]}."


# ============================================================
# Author lists
# ============================================================


def _apa_authors(names: list[_Name]) -> str:
    if len(names) == 1:
        return f"{names[0].last}, {names[0].initial}"
    if len(names) == 2:
        a, b = names
        return f"{a.last}, {a.initial}, & {b.last}, {b.initial}"
    return f"{names[0].last}, {names[0].initial}, et al."


def _mla_authors(names: list[_Name]) -> str:
    if len(names) == 1:
        return f"{names[0].last}, {names[0].first}"
    if len(names) == 2:
        a, b = names
        return f"{a.last}, {a.first}, and {b.first} {b.last}"
    return f"{names[0].last}, {names[0].first}, et al."


def _chicago_authors(names: list[_Name]) -> str:
    if len(names) == 1:
        return names[0].full
    if len(names) == 2:
        return f"{names[0].full} and {names[1].full}"
    if len(names) == 3:
        return f"{names[0].full}, {names[1].full}, and {names[2].full}"
    return f"{names[0].full} et al."


def _harvard_authors(names: list[_Name]) -> str:
    if len(names) == 1:
        return f"{names[0].last}, {names[0].initial}"
    if len(names) == 2:
        a, b = names
        return f"{a.last}, {a.initial} and {b.last}, {b.initial}"
    return f"{names[0].last}, {names[0].initial} et al."


def _bluebook_authors(names: list[_Name]) -> str:
    if len(names) == 1:
        return names[0].full
    if len(names) == 2:
        return f"{names[0].full} & {names[1].full}"
    return f"{names[0].full} et al."


def _oscola_authors(names: list[_Name]) -> str:
    short = [f"{n.first} {n.last}" for n in names]
    if len(short) == 1:
        return short[0]
    if len(short) in (2, 3):
        return f"{', '.join(short[:-1])} and {short[-1]}"
    return f"{short[0]} and others"


_AUTHOR_FORMATTERS: dict[CitationStyle, Callable[[list[_Name]], str]] = {
    CitationStyle.APA: _apa_authors,
    CitationStyle.MLA: _mla_authors,
    CitationStyle.CHICAGO: _chicago_authors,
    CitationStyle.HARVARD: _harvard_authors,
    CitationStyle.BLUEBOOK: _bluebook_authors,
    CitationStyle.OSCOLA: _oscola_authors,
}


def format_authors(authors: list[str], style: CitationStyle) -> str:
    """Format an author list for a citation style.

    Blank names are ignored; an empty list yields ``"Unknown Author"``.
    """
    names = [_Name(a) for a in authors if a.strip()]
    if not names:
        return UNKNOWN_AUTHOR
    return _AUTHOR_FORMATTERS[CitationStyle(style)](names)


# ============================================================
# Dates
# ============================================================


def _us_date(d: date) -> str:
    return f"{d:%B} {d.day}, {d.year}"


def _uk_date(d: date) -> str:
    return f"{d.day} {d:%B} {d.year}"


def _bluebook_date(d: date) -> str:
    return f"{_BLUEBOOK_MONTHS[d.month - 1]} {d.day}, {d.year}"


# ============================================================
# Citations
# ============================================================


def format_citation(
    article: ArticleCitationInfo,
    style: CitationStyle | str,
    accessed: date | None = None,
    journal: JournalInfo | None = None,
) -> str:
    """Format a citation for an article.

    Args:
        article: The article being cited
        style: One of the ``CitationStyle`` values
        accessed: Access date for Harvard and OSCOLA, defaults to today (UTC)
        journal: Journal details, defaults to the configured journal

    Returns:
        The citation as plain text

    Raises:
        ValueError: If ``style`` is not a supported citation style
    """
    style = CitationStyle(style)
    journal = journal or JournalInfo.from_settings()
    accessed = accessed or datetime.now(UTC).date()

    authors = format_authors(article.authors, style)
    published = article.published
    year = published.year
    url = f"{journal.site_url}/journals/{article.slug}"
    doi_url = f"https://doi.org/{article.doi}" if article.doi else None

    match style:
        case CitationStyle.APA:
            source = doi_url or f"Retrieved from {url}"
            return f"{authors} ({year}). {article.title}. {journal.name}. {source}"

        case CitationStyle.MLA:
            source = f"doi:{article.doi}" if article.doi else url.split("://", 1)[-1]
            return (
                f'{authors}. "{article.title}." {journal.name}, '
                f"{_uk_date(published)}, {source}."
            )

        case CitationStyle.CHICAGO:
            return (
                f'{authors}. "{article.title}." {journal.name} '
                f"({_us_date(published)}). {doi_url or url}."
            )

        case CitationStyle.HARVARD:
            source = f"DOI: {article.doi}" if article.doi else f"Available at: {url}"
            return (
                f"{authors} ({year}) '{article.title}', {journal.name}, "
                f"{source} (Accessed: {_us_date(accessed)})."
            )

        case CitationStyle.BLUEBOOK:
            return (
                f"{authors}, {article.title}, {journal.abbreviation} "
                f"({_bluebook_date(published)}), {doi_url or url}."
            )

        case CitationStyle.OSCOLA:
            volume = article.volume or 1
            issue = article.issue or 1
            source = article.doi or url
            return (
                f"{authors}, '{article.title}' [{year}] {journal.name} "
                f"{volume}({issue}) <{source}> accessed {_uk_date(accessed)}"
            )


def format_all_citations(
    article: ArticleCitationInfo,
    accessed: date | None = None,
    journal: JournalInfo | None = None,
) -> dict[CitationStyle, str]:
    """Format the article in every supported style, in menu order."""
    journal = journal or JournalInfo.from_settings()
    return {
        style: format_citation(article, style, accessed=accessed, journal=journal)
        for style in CitationStyle
    }
