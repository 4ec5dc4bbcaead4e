from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat
from typing import Literal, Optional, Tuple, Union


class ConversationTurn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    latency: Optional[NonNegativeFloat] = None


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str


class AudioInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    filename: Optional[str] = None
    content_type: Optional[str] = None
    data: bytes


class IncomingRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    input: Union[str, AudioInput]
    history: Tuple[ConversationTurn, ...] = ()

    @property
    def is_audio(self) -> bool:
        return isinstance(self.input, AudioInput)


class CallerContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str = "unknown"
    local_time: str = "unknown"


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    audio_buffer: Optional[str] = Field(default=None, alias="audioBuffer")


class SpeechRequest(BaseModel):
    text: str
