"""Inline hyperlink markup for notification content.

Notifications are plain text with links written as
``hyperLink:[link text](example.com/page)``. URLs without an ``http://`` or
``https://`` scheme are treated as ``https://``.
"""

import html
import re
from typing import Literal

from pydantic import BaseModel, ConfigDict


HYPERLINK_PATTERN = re.compile(r"hyperLink:\[([^\]]+)\]\(([^)]+)\)")


class Hyperlink(BaseModel):
    """A link as written in the content."""

    model_config = ConfigDict(frozen=True)

    text: str
    url: str


class ContentSegment(BaseModel):
    """A run of plain text, or a link with its normalized URL."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text", "link"]
    text: str
    url: str | None = None


def normalize_url(url: str) -> str:
    """Prefix ``https://`` unless the URL already has an http(s) scheme."""
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


def parse_hyperlinks(content: str) -> list[ContentSegment]:
    """Split content into text and link segments, in order.

    Content without links, including empty content, is a single text segment.
    """
    segments: list[ContentSegment] = []
    last_end = 0

    for match in HYPERLINK_PATTERN.finditer(content):
        if match.start() > last_end:
            segments.append(
                ContentSegment(kind="text", text=content[last_end : match.start()])
            )
        segments.append(
            ContentSegment(
                kind="link",
                text=match.group(1),
                url=normalize_url(match.group(2)),
            )
        )
        last_end = match.end()

    if last_end < len(content):
        segments.append(ContentSegment(kind="text", text=content[last_end:]))

    return segments or [ContentSegment(kind="text", text=content)]


def has_hyperlinks(content: str) -> bool:
    return HYPERLINK_PATTERN.search(content) is not None


def extract_hyperlinks(content: str) -> list[Hyperlink]:
    """Return every link as written, URLs not normalized."""
    return [
        Hyperlink(text=m.group(1), url=m.group(2))
        for m in HYPERLINK_PATTERN.finditer(content)
    ]


def to_plain_text(content: str) -> str:
    """Replace each link with its text."""
    return HYPERLINK_PATTERN.sub(r"\1", content)


def render_html(content: str) -> str:
    """Render content as HTML with escaped text and links opening in a new tab."""
    if not has_hyperlinks(content):
        return html.escape(content)
    parts: list[str] = []
    for segment in parse_hyperlinks(content):
        text = html.escape(segment.text)
        if segment.kind == "link":
            href = html.escape(segment.url or "", quote=True)
            parts.append(
                f'<a href="{href}" target="_blank" rel="noopener noreferrer">{text}</a>'
            )
        else:
            parts.append(text)
    return "".join(parts)
