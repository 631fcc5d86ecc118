import logging
from typing import Optional

import httpx

from config import get_settings
from .exceptions import GenerationError

logger = logging.getLogger(__name__)


async def complete(
    system: str, user: str, transport: Optional[httpx.AsyncBaseTransport] = None
) -> str:
    """Ask the OpenRouter chat-completions API for a reply.

    Raises:
        GenerationError: Missing key, HTTP or transport failure, or a
            response without usable text.
    """
    settings = get_settings()
    if not settings.openrouter_key:
        raise GenerationError("OPEN_ROUTER_KEY is not set")

    headers = {
        "Authorization": f"Bearer {settings.openrouter_key}",
        "HTTP-Referer": "https://email-writer",
        "X-Title": "Email Writer",
        "Content-Type": "application/json",
    }
    payload = {
        "model": settings.openrouter_model,
        "messages": [
            {"role": "system", "content": system},
            {"role": "user", "content": user},
        ],
        "temperature": 0.7,
        "max_tokens": 512,
    }

    try:
        async with httpx.AsyncClient(timeout=60, transport=transport) as client:
            r = await client.post(
                f"{settings.openrouter_base}/chat/completions", headers=headers, json=payload
            )
            r.raise_for_status()
            data = r.json()
    except httpx.HTTPStatusError as e:
        logger.error(
            "OpenRouter HTTP error: %s %s", e.response.status_code, e.response.text[:200]
        )
        raise GenerationError(f"LLM request failed with status {e.response.status_code}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise GenerationError(f"LLM request failed: {e}") from e
    except ValueError as e:
        logger.error("OpenRouter returned a non-JSON body: %s", r.text[:200])
        raise GenerationError("LLM response was not valid JSON") from e

    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict) or "message" not in choices[0]:
        raise GenerationError("No valid response from LLM")
    message = choices[0]["message"]
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise GenerationError("LLM response had no text content")
    logger.debug("OpenRouter returned %d choice(s)", len(choices))
    return content.strip()
