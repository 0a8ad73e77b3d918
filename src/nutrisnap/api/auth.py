"""Shared-secret authentication for webhook and job routes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from nutrisnap.containers import AppContainer


def _get_webhook_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.webhook_token


async def require_webhook_token(
    x_webhook_token: str | None = Header(default=None),
    webhook_token: str = Depends(_get_webhook_token),
) -> None:
    """Ensure requests include the configured webhook token."""
    if not x_webhook_token or x_webhook_token != webhook_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
