import logging

from models import GenerationRequest
from .llm import complete

logger = logging.getLogger(__name__)

SYS = (
    "You are an email drafting assistant. "
    "Write only the body of the reply, without a subject line."
)


def build_prompt(request: GenerationRequest) -> str:
    prompt = (
        "Generate a professional email reply for the following email content. "
        "Please don't generate a subject line "
    )
    if request.tone.value:
        prompt += f"Use a {request.tone.value} tone."
    prompt += f"\nOriginal email content: \n{request.email_content}"
    return prompt


async def draft(request: GenerationRequest) -> str:
    logger.info("Drafting reply (tone=%r, %d chars)", request.tone.value, len(request.email_content))
    text = await complete(SYS, build_prompt(request))
    return text.strip()
