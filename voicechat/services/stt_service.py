import asyncio
import io
import logging
from typing import Optional
import assemblyai as aai

logger = logging.getLogger(__name__)

SPEECH_MODEL = aai.SpeechModel.best


class Transcriber:
    """Speech-to-text through AssemblyAI. Returns None for unusable audio instead of raising."""

    def __init__(self, api_key: Optional[str] = None, transcriber: Optional[aai.Transcriber] = None):
        self._config = aai.TranscriptionConfig(speech_model=SPEECH_MODEL)
        if transcriber is None:
            client = aai.Client(settings=aai.Settings(api_key=api_key))
            transcriber = aai.Transcriber(client=client, config=self._config)
        self._transcriber = transcriber

    async def transcribe(self, audio_bytes: bytes) -> Optional[str]:
        if not audio_bytes:
            logger.warning("Empty audio upload, skipping transcription")
            return None

        try:
            transcript = await asyncio.to_thread(
                self._transcriber.transcribe, io.BytesIO(audio_bytes), self._config
            )
        except Exception as e:
            logger.warning(f"Transcription request failed: {e}")
            return None

        if transcript.status == aai.TranscriptStatus.error:
            logger.warning(f"Transcription failed: {transcript.error}")
            return None

        text = (transcript.text or "").strip()
        if not text:
            logger.info("Transcript is empty")
            return None

        logger.info(f"Transcription: {text}")
        return text
