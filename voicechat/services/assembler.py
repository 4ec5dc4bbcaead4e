import base64
from typing import Optional
from voicechat.schemas.chat_schemas import ChatResponse


def assemble_response(text: str, audio: Optional[bytes]) -> bytes:
    """`{"text": ..., "audioBuffer": <base64 or null>}` as JSON bytes."""
    audio_buffer = base64.b64encode(audio).decode("utf-8") if audio else None
    response = ChatResponse(text=text, audio_buffer=audio_buffer)
    return response.model_dump_json(by_alias=True).encode("utf-8")
