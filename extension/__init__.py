"""Compose-toolbar integration: watch a webmail page and inject the AI Reply trigger."""

import asyncio
from typing import Callable, Optional

from config import get_settings
from models import Tone
from services.requester import ReplyRequester
from .assistant import ComposeAssistant
from .dom import ObservedDocument
from .watcher import SurfaceWatcher


def attach(
    document: ObservedDocument,
    endpoint: Optional[str] = None,
    tone: Optional[Tone] = None,
    delay: Optional[float] = None,
    alert: Optional[Callable[[str], None]] = None,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> SurfaceWatcher:
    """Wire requester, assistant and watcher for ``document`` and start watching.

    Pass ``loop`` when calling from outside a running event loop.
    """
    settings = get_settings()
    requester = ReplyRequester(endpoint or settings.reply_endpoint, timeout=settings.request_timeout)
    assistant = ComposeAssistant(
        document,
        requester,
        tone=tone if tone is not None else Tone(settings.default_tone),
        alert=alert,
    )
    watcher = SurfaceWatcher(
        document,
        assistant,
        delay=settings.inject_delay if delay is None else delay,
        loop=loop,
    )
    watcher.start()
    return watcher


__all__ = ["ComposeAssistant", "ObservedDocument", "SurfaceWatcher", "attach"]
