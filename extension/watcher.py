"""Keeps one "AI Reply" trigger in the compose toolbar of the host page."""

import asyncio
import logging
from typing import List, Optional

from bs4 import Tag

from .assistant import ComposeAssistant
from .dom import MutationRecord, ObservedDocument
from .matchers import COMPOSE_MARKERS, TOOLBAR_CHAIN, ComposeMarkers, MatcherChain
from .trigger import TRIGGER_SELECTOR, create_trigger

logger = logging.getLogger(__name__)

INJECT_DELAY = 0.5


class SurfaceWatcher:
    """Watches an ObservedDocument and (re)injects the trigger control.

    Mutation batches that add compose-surface nodes schedule an injection
    attempt ``delay`` seconds later, giving the host page time to finish
    building the compose DOM. Injection replaces any trigger already present,
    so there is never more than one.

    Example usage:
        watcher = SurfaceWatcher(document, assistant)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(
        self,
        document: ObservedDocument,
        assistant: ComposeAssistant,
        delay: float = INJECT_DELAY,
        toolbar: MatcherChain = TOOLBAR_CHAIN,
        markers: ComposeMarkers = COMPOSE_MARKERS,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self.document = document
        self.assistant = assistant
        self.delay = delay
        self.toolbar = toolbar
        self.markers = markers
        self._loop = loop
        self._running = False
        self._pending: List[asyncio.TimerHandle] = []

    @property
    def running(self) -> bool:
        return self._running

    @property
    def trigger(self) -> Optional[Tag]:
        return self.document.select_one(TRIGGER_SELECTOR)

    def start(self, target: Optional[Tag] = None) -> None:
        """Observe ``target``, defaulting to the body (or the whole document).

        Injection attempts are scheduled on the loop given to the constructor,
        else on the loop running when start() is called.

        Raises:
            RuntimeError: No loop was given and none is running.
        """
        if self._running:
            return
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError as e:
                raise RuntimeError("SurfaceWatcher.start() needs a running event loop or loop=...") from e
        target = target if target is not None else self.document.body
        self.document.observe(self._on_mutations, target)
        self._running = True
        logger.info("Surface watcher started")

    def stop(self) -> None:
        self.document.disconnect(self._on_mutations)
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()
        self._running = False

    def _on_mutations(self, records: List[MutationRecord]) -> None:
        for record in records:
            if any(isinstance(node, Tag) and self.markers.matches(node) for node in record.added_nodes):
                logger.debug("Compose window detected, scheduling injection")
                self._schedule()

    def _schedule(self) -> None:
        loop = self._loop
        self._pending = [h for h in self._pending if not h.cancelled() and h.when() > loop.time()]
        self._pending.append(loop.call_later(self.delay, self.inject))

    def inject(self) -> None:
        toolbar = self.toolbar.first_match(self.document.soup)
        if toolbar is None:
            if self.markers.present_in(self.document.soup):
                logger.warning("Compose surface present but no toolbar matched; host markup may have changed")
            else:
                logger.debug("Compose toolbar not found")
            return

        existing = self.trigger
        if existing is not None:
            self.document.remove(existing)

        button = create_trigger(self.document)
        self.document.add_click_listener(button, self.assistant.activate)
        self.document.insert_first(toolbar, button)
        logger.info("AI Reply button injected")
