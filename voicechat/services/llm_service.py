import logging
from typing import List, Sequence
from google import genai
from google.genai import types
from voicechat.schemas.chat_schemas import ChatMessage
from voicechat.utils.errors import CompletionFailure

logger = logging.getLogger(__name__)

COMPLETION_MODEL = "gemini-2.5-flash"

# Gemini calls the assistant side of a conversation "model"
ROLE_MAP = {"user": "user", "assistant": "model"}


def to_contents(messages: Sequence[ChatMessage]) -> List[types.Content]:
    return [
        types.Content(role=ROLE_MAP[m.role], parts=[types.Part(text=m.content)])
        for m in messages
        if m.role != "system"
    ]


class CompletionService:
    def __init__(self, client: genai.Client, model: str = COMPLETION_MODEL):
        self._client = client
        self._model = model

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        system_instruction = "\n".join(m.content for m in messages if m.role == "system")

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=to_contents(messages),
                config=types.GenerateContentConfig(system_instruction=system_instruction or None),
            )
        except Exception as e:
            logger.error(f"Error calling {self._model}: {e}")
            raise CompletionFailure(str(e)) from e

        text = response.text
        if not text:
            logger.error(f"{self._model} returned an empty completion")
            raise CompletionFailure("empty completion")

        return text
