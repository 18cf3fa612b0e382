"""Notification API routes."""

from typing import Annotated

from fastapi import Depends

from journal.core.permissions import AuthUser
from journal.core.permissions.dependencies import require_any_permission
from journal.modules.notifications import router
from journal.modules.notifications.links import (
    extract_hyperlinks,
    parse_hyperlinks,
    render_html,
    to_plain_text,
)
from journal.modules.notifications.schemas import (
    NotificationPreviewRequest,
    NotificationPreviewResponse,
)


CanEditNotifications = Annotated[
    AuthUser,
    Depends(require_any_permission(["notification.CREATE", "notification.UPDATE"])),
]


@router.post(
    "/preview",
    response_model=NotificationPreviewResponse,
    summary="Preview notification content",
    description="Parse ``hyperLink:[text](url)`` markup and render it as HTML.",
)
async def preview_notification(
    data: NotificationPreviewRequest,
    current_user: CanEditNotifications,  # noqa: ARG001
) -> NotificationPreviewResponse:
    return NotificationPreviewResponse(
        segments=parse_hyperlinks(data.content),
        links=extract_hyperlinks(data.content),
        plain_text=to_plain_text(data.content),
        html=render_html(data.content),
    )
