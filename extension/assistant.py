"""Reply generation for the injected compose-toolbar trigger."""

import logging
from typing import Callable, Optional

from bs4 import Tag

from models import GenerationRequest, Tone
from services.exceptions import ElementNotFound, RequestFailed
from services.requester import ReplyRequester
from .dom import ObservedDocument
from .matchers import CONTENT_CHAIN, EDITABLE_CHAIN, MatcherChain
from .trigger import set_busy, set_resting

logger = logging.getLogger(__name__)


def log_alert(message: str) -> None:
    logger.error("Reply generation failed: %s", message)


class ComposeAssistant:
    """Handles trigger activations: read the email, request a reply, insert it.

    Only one request may be in flight; activating the trigger again while
    busy does nothing.
    """

    def __init__(
        self,
        document: ObservedDocument,
        requester: ReplyRequester,
        tone: Tone = Tone.PROFESSIONAL,
        alert: Optional[Callable[[str], None]] = None,
        content: MatcherChain = CONTENT_CHAIN,
        editable: MatcherChain = EDITABLE_CHAIN,
    ):
        self.document = document
        self.requester = requester
        self.tone = tone
        self.alert = alert or log_alert
        self.content = content
        self.editable = editable
        self._in_flight = False

    @property
    def busy(self) -> bool:
        return self._in_flight

    def extract_email_content(self) -> str:
        element = self.content.first_match(self.document.soup)
        if element is None:
            logger.debug("No email content found")
            return ""
        return element.get_text().strip()

    def insert_reply(self, reply: str) -> None:
        """Focus the editable compose field and insert ``reply`` at the caret.

        Raises:
            ElementNotFound: No editable compose field in the document.
        """
        compose_box = self.editable.first_match(self.document.soup)
        if compose_box is None:
            raise ElementNotFound("Compose box not found")
        self.document.focus(compose_box)
        self.document.insert_text(reply)

    async def activate(self, trigger: Tag) -> None:
        if self._in_flight:
            logger.debug("Activation ignored, a reply is already being generated")
            return

        self._in_flight = True
        set_busy(trigger)
        try:
            request = GenerationRequest(email_content=self.extract_email_content(), tone=self.tone)
            reply = await self.requester.generate(request)
            try:
                self.insert_reply(reply)
            except ElementNotFound as e:
                logger.warning("%s, generated reply dropped", e)
        except RequestFailed as e:
            self.alert(str(e))
        finally:
            set_resting(trigger)
            self._in_flight = False
