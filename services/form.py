"""Email reply generator page: form state and HTML rendering."""

import asyncio
import logging
from html import escape
from typing import Callable, Optional

from models import GenerationRequest, Tone
from .exceptions import RequestFailed
from .requester import ReplyRequester, to_display_text

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "Failed to generate email reply. Please try again."
COPIED_RESET_SECONDS = 2.0


class ReplyForm:
    """State behind the reply generator page.

    Mirrors what the page shows: the email text, the chosen tone, the last
    generated reply, an error message, and the loading, copied and dark-mode
    flags. A form built without a requester can be rendered but not
    submitted.
    """

    def __init__(
        self,
        requester: Optional[ReplyRequester] = None,
        email_content: str = "",
        tone: Tone = Tone.NONE,
        generated_reply: str = "",
        dark_mode: bool = False,
        clipboard: Optional[Callable[[str], None]] = None,
        copied_reset: float = COPIED_RESET_SECONDS,
    ):
        self.requester = requester
        self.email_content = email_content
        self.tone = tone
        self.generated_reply = generated_reply
        self.dark_mode = dark_mode
        self.clipboard = clipboard
        self.copied_reset = copied_reset
        self.loading = False
        self.error = ""
        self.copied = False

    @property
    def can_submit(self) -> bool:
        return bool(self.email_content) and not self.loading

    async def submit(self) -> None:
        if not self.can_submit:
            return
        if self.requester is None:
            raise RuntimeError("ReplyForm has no requester to submit with")
        self.loading = True
        self.error = ""
        try:
            body = await self.requester.generate(
                GenerationRequest(email_content=self.email_content, tone=self.tone)
            )
            self.generated_reply = to_display_text(body)
        except RequestFailed as e:
            logger.error("Reply generation failed: %s", e)
            self.error = ERROR_MESSAGE
        finally:
            self.loading = False

    def copy(self) -> None:
        """Copy the reply verbatim and show the copied mark for a moment."""
        if self.clipboard is None:
            raise RuntimeError("No clipboard available")
        self.clipboard(self.generated_reply)
        self.copied = True
        asyncio.get_running_loop().call_later(self.copied_reset, self._clear_copied)

    def _clear_copied(self) -> None:
        self.copied = False

    def toggle_theme(self) -> None:
        self.dark_mode = not self.dark_mode


PAGE = """<!doctype html>
<html data-theme="{theme}">
<head>
  <meta charset="utf-8" />
  <title>Email Reply Generator</title>
  <style>
    :root {{ --bg: #ffffff; --text: #000000; --panel: #f0f0f0; --field: #ffffff; }}
    :root[data-theme='dark'] {{ --bg: #333333; --text: #ffffff; --panel: #444444; --field: #555555; }}
    body {{ font-family: Arial, sans-serif; max-width: 900px; margin: 32px auto; padding: 0 24px;
           background: var(--bg); color: var(--text); }}
    h1 {{ background: var(--panel); padding: 16px; text-align: center; border-radius: 8px; }}
    textarea, select, button {{ width: 100%; box-sizing: border-box; margin-bottom: 16px;
           background: var(--field); color: var(--text); font: inherit; padding: 8px; }}
    .theme-toggle {{ position: absolute; top: 16px; right: 16px; }}
    .error {{ color: #d32f2f; }}
  </style>
</head>
<body>
  <a class="theme-toggle" href="/?theme={other_theme}">{toggle_label}</a>
  <h1>Email Reply Generator</h1>
  <form method="post" action="/" id="reply-form">
    <label for="email_content">Original Email Content</label>
    <textarea id="email_content" name="email_content" rows="6">{email_content}</textarea>
    <label for="tone">Tone (Optional)</label>
    <select id="tone" name="tone">
{tone_options}
    </select>
    <input type="hidden" name="generated_reply" value="{generated_reply}" />
    <input type="hidden" name="theme" value="{theme}" />
    <button type="submit" id="submit"{submit_disabled}>{submit_label}</button>
  </form>
{error_block}{reply_block}
  <script>
    const content = document.getElementById("email_content");
    const submit = document.getElementById("submit");
    content.addEventListener("input", () => {{ submit.disabled = !content.value; }});
    document.getElementById("reply-form").addEventListener("submit", () => {{
      submit.disabled = true;
      submit.textContent = "Generating...";
    }});
    const copy = document.getElementById("copy");
    if (copy) {{
      copy.addEventListener("click", () => {{
        navigator.clipboard.writeText(document.getElementById("generated_reply").value);
        copy.textContent = "Copied!";
        setTimeout(() => {{ copy.textContent = "Copy to Clipboard"; }}, {copied_reset_ms});
      }});
    }}
  </script>
</body>
</html>
"""

REPLY_BLOCK = """  <h2>Generated Reply:</h2>
  <textarea id="generated_reply" rows="6" readonly>{generated_reply}</textarea>
  <button type="button" id="copy" title="Copy to Clipboard">{copy_label}</button>
"""


def render_page(form: ReplyForm) -> str:
    theme = "dark" if form.dark_mode else "light"
    options = "\n".join(
        '      <option value="{value}"{selected}>{label}</option>'.format(
            value=escape(tone.value),
            selected=" selected" if tone is form.tone else "",
            label=tone.label,
        )
        for tone in Tone
    )
    error_block = f'  <p class="error">{escape(form.error)}</p>\n' if form.error else ""
    reply_block = ""
    if form.generated_reply:
        reply_block = REPLY_BLOCK.format(
            generated_reply=escape(form.generated_reply),
            copy_label="Copied!" if form.copied else "Copy to Clipboard",
        )
    return PAGE.format(
        theme=theme,
        other_theme="light" if form.dark_mode else "dark",
        toggle_label="Light mode" if form.dark_mode else "Dark mode",
        email_content=escape(form.email_content),
        tone_options=options,
        generated_reply=escape(form.generated_reply),
        submit_disabled="" if form.can_submit else " disabled",
        submit_label="Generating..." if form.loading else "Generate Reply",
        error_block=error_block,
        reply_block=reply_block,
        copied_reset_ms=int(form.copied_reset * 1000),
    )
