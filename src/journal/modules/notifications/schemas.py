"""Notification API schemas."""

from pydantic import BaseModel, Field

from journal.modules.notifications.links import ContentSegment, Hyperlink


class NotificationPreviewRequest(BaseModel):
    content: str = Field(..., max_length=5000)


class NotificationPreviewResponse(BaseModel):
    """Notification content as the public site renders it."""

    segments: list[ContentSegment]
    links: list[Hyperlink]
    plain_text: str
    html: str
