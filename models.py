from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class Tone(str, Enum):
    NONE = ""
    PROFESSIONAL = "professional"
    CASUAL = "casual"
    FRIENDLY = "friendly"

    @property
    def label(self) -> str:
        return self.value.capitalize() if self.value else "None"


class GenerationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email_content: str = Field(default="", alias="emailContent")
    tone: Tone = Tone.NONE

    def to_payload(self) -> Dict[str, str]:
        """JSON body sent to the generation endpoint."""
        return {"emailContent": self.email_content, "tone": self.tone.value}
