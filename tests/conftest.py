import pytest
from fastapi.testclient import TestClient
from voicechat.main import create_app
from voicechat.services.registry import Services
from voicechat.utils.errors import CompletionFailure, SynthesisCause, SynthesisFailure

FAKE_WAV = b"RIFF\x24\x00\x00\x00WAVEfmt fake-audio"


class FakeTranscriber:
    def __init__(self, transcript="What's up"):
        self.transcript = transcript
        self.calls = []

    async def transcribe(self, audio_bytes):
        self.calls.append(audio_bytes)
        return self.transcript


class FakeCompletion:
    def __init__(self, reply="Hi there", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def complete(self, messages):
        self.calls.append(list(messages))
        if self.error:
            raise self.error
        return self.reply


class FakeSynthesizer:
    def __init__(self, audio=FAKE_WAV, cause=None):
        self.audio = audio
        self.cause = cause
        self.calls = []

    async def synthesize(self, text):
        self.calls.append(text)
        if self.cause:
            raise SynthesisFailure(self.cause)
        return self.audio


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def transcriber():
    return FakeTranscriber()


@pytest.fixture
def completion():
    return FakeCompletion()


@pytest.fixture
def synthesizer():
    return FakeSynthesizer()


@pytest.fixture
def services(transcriber, completion, synthesizer):
    return Services(transcriber=transcriber, completion=completion, synthesizer=synthesizer)


@pytest.fixture
def api(services):
    return TestClient(create_app(services))


@pytest.fixture
def failing_completion_api(transcriber, synthesizer):
    services = Services(
        transcriber=transcriber,
        completion=FakeCompletion(error=CompletionFailure("quota exceeded")),
        synthesizer=synthesizer,
    )
    return TestClient(create_app(services), raise_server_exceptions=False)


@pytest.fixture
def broken_synthesizer():
    return FakeSynthesizer(cause=SynthesisCause.GENERIC)
