from dataclasses import dataclass
from google import genai
from voicechat.services.llm_service import CompletionService
from voicechat.services.stt_service import Transcriber
from voicechat.services.tts_service import SpeechSynthesizer
from voicechat.utils.config import Settings


@dataclass(frozen=True)
class Services:
    transcriber: Transcriber
    completion: CompletionService
    synthesizer: SpeechSynthesizer


def build_services(settings: Settings) -> Services:
    """Create the provider clients once at startup; they are shared read-only by every request."""
    return Services(
        transcriber=Transcriber(api_key=settings.assemblyai_api_key),
        completion=CompletionService(genai.Client(api_key=settings.gemini_api_key)),
        synthesizer=SpeechSynthesizer(api_key=settings.murf_api_key),
    )
