import io
import numpy as np
import soundfile as sf
from voicechat.client.orchestrator import ChatClient

VAD_SAMPLE_RATE = 16000


def encode_wav(samples, sample_rate: int = VAD_SAMPLE_RATE) -> bytes:
    """Float samples in [-1, 1] from the voice-activity detector -> mono 16-bit WAV."""
    buffer = io.BytesIO()
    sf.write(buffer, np.asarray(samples, dtype=np.float32), sample_rate, format="WAV", subtype="PCM_16")
    return buffer.getvalue()


class VoiceCapture:
    """Sink for the voice-activity detector: every finished utterance is its own request."""

    def __init__(self, client: ChatClient, sample_rate: int = VAD_SAMPLE_RATE):
        self.client = client
        self.sample_rate = sample_rate

    async def on_speech_end(self, samples) -> bool:
        # the user started talking over the previous reply
        if self.client.player is not None:
            self.client.player.stop()

        return await self.client.submit(encode_wav(samples, self.sample_rate))
