import base64
import json
import logging
from typing import Callable, List, Optional
from urllib.parse import urlencode
import websockets
from voicechat.utils.errors import SynthesisCause, SynthesisFailure

logger = logging.getLogger(__name__)

MURF_WS_URL = "wss://api.murf.ai/v1/speech/stream-input"
VOICE_ID = "en-US-natalie"
VOICE_STYLE = "Conversational"
TTS_MODEL = "GEN2"
SAMPLE_RATE = 24000

AUTH_STATUS_CODES = {401, 403}


class MurfStreamError(Exception):
    """Error frame sent by Murf inside an open stream."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _status_code(error: BaseException) -> Optional[int]:
    status = getattr(error, "status_code", None)
    if status is None:
        # websockets.InvalidStatus carries the rejected handshake response
        status = getattr(getattr(error, "response", None), "status_code", None)
    return status


def classify_synthesis_error(error: BaseException) -> SynthesisCause:
    if _status_code(error) in AUTH_STATUS_CODES:
        return SynthesisCause.AUTHENTICATION
    return SynthesisCause.GENERIC


class SpeechSynthesizer:
    def __init__(
        self,
        api_key: str,
        voice_id: str = VOICE_ID,
        model: str = TTS_MODEL,
        sample_rate: int = SAMPLE_RATE,
        connect: Callable = websockets.connect,
    ):
        self.api_key = api_key
        self.voice_id = voice_id
        self.model = model
        self.sample_rate = sample_rate
        self._connect = connect

    @property
    def url(self) -> str:
        params = {
            "api-key": self.api_key,
            "model": self.model,
            "sample_rate": self.sample_rate,
            "channel_type": "MONO",
            "format": "WAV",
        }
        return f"{MURF_WS_URL}?{urlencode(params)}"

    async def _stream(self, text: str) -> List[bytes]:
        chunks: List[bytes] = []

        async with self._connect(self.url) as ws:
            await ws.send(json.dumps({
                "voice_config": {"voiceId": self.voice_id, "style": VOICE_STYLE}
            }))
            await ws.send(json.dumps({"text": text, "end": True}))

            async for msg in ws:
                data = json.loads(msg)

                if "error" in data:
                    raise MurfStreamError(str(data["error"]), data.get("status_code"))

                if data.get("audio"):
                    chunks.append(base64.b64decode(data["audio"]))

                if data.get("final"):
                    break

        return chunks

    async def synthesize(self, text: str) -> bytes:
        """
        Speak `text` with the fixed Murf voice and return the whole WAV stream.
        Raises SynthesisFailure tagged with a coarse cause; never retries.
        """
        try:
            chunks = await self._stream(text)
        except Exception as e:
            cause = classify_synthesis_error(e)
            if cause is SynthesisCause.AUTHENTICATION:
                logger.error("Invalid API key or authentication error.")
            else:
                logger.error(f"TTS API error, possibly out of tokens: {e}")
            raise SynthesisFailure(cause, str(e)) from e

        if not chunks:
            logger.error("TTS stream finished without audio")
            raise SynthesisFailure(SynthesisCause.GENERIC, "no audio received")

        audio = b"".join(chunks)
        logger.info(f"Generated {len(audio)} bytes of audio")
        return audio
