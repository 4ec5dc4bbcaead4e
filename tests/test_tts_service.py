import base64
import json
from urllib.parse import parse_qs, urlparse
import pytest
from voicechat.services.tts_service import (
    MURF_WS_URL,
    VOICE_ID,
    SpeechSynthesizer,
    classify_synthesis_error,
)
from voicechat.utils.errors import SynthesisCause, SynthesisFailure


class FakeStream:
    def __init__(self, frames):
        self.frames = frames
        self.sent = []
        self.url = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def send(self, message):
        self.sent.append(json.loads(message))

    async def _frames(self):
        for frame in self.frames:
            yield json.dumps(frame)

    def __aiter__(self):
        return self._frames()


class HandshakeRejected(Exception):
    def __init__(self, status_code):
        super().__init__(f"server rejected WebSocket connection: HTTP {status_code}")
        self.response = type("Response", (), {"status_code": status_code})()


def connect_to(stream):
    def connect(url):
        stream.url = url
        return stream
    return connect


def rejecting(status_code):
    def connect(url):
        raise HandshakeRejected(status_code)
    return connect


def audio_frame(data: bytes, **extra):
    return {"audio": base64.b64encode(data).decode(), **extra}


@pytest.mark.anyio
async def test_chunks_are_concatenated_until_final():
    stream = FakeStream([
        audio_frame(b"RIFF-header"),
        audio_frame(b"-pcm-1"),
        audio_frame(b"-pcm-2", final=True),
        audio_frame(b"-after-final"),
    ])
    synthesizer = SpeechSynthesizer("murf-key", connect=connect_to(stream))

    assert await synthesizer.synthesize("Hi there") == b"RIFF-header-pcm-1-pcm-2"

    assert stream.sent == [
        {"voice_config": {"voiceId": VOICE_ID, "style": "Conversational"}},
        {"text": "Hi there", "end": True},
    ]


@pytest.mark.anyio
async def test_stream_url_carries_key_and_format():
    stream = FakeStream([audio_frame(b"RIFF", final=True)])
    await SpeechSynthesizer("murf-key", connect=connect_to(stream)).synthesize("x")

    url = urlparse(stream.url)
    query = parse_qs(url.query)
    assert f"{url.scheme}://{url.netloc}{url.path}" == MURF_WS_URL
    assert query["api-key"] == ["murf-key"]
    assert query["format"] == ["WAV"]


@pytest.mark.parametrize("status_code", [401, 403])
@pytest.mark.anyio
async def test_rejected_credentials_are_authentication_failures(status_code):
    synthesizer = SpeechSynthesizer("bad-key", connect=rejecting(status_code))

    with pytest.raises(SynthesisFailure) as excinfo:
        await synthesizer.synthesize("Hello")

    assert excinfo.value.cause is SynthesisCause.AUTHENTICATION


@pytest.mark.anyio
async def test_quota_exhaustion_is_generic_failure():
    synthesizer = SpeechSynthesizer("murf-key", connect=rejecting(429))

    with pytest.raises(SynthesisFailure) as excinfo:
        await synthesizer.synthesize("Hello")

    assert excinfo.value.cause is SynthesisCause.GENERIC


@pytest.mark.anyio
async def test_error_frame_is_a_failure():
    stream = FakeStream([{"error": "character limit exceeded"}])

    with pytest.raises(SynthesisFailure) as excinfo:
        await SpeechSynthesizer("murf-key", connect=connect_to(stream)).synthesize("Hello")

    assert excinfo.value.cause is SynthesisCause.GENERIC


@pytest.mark.anyio
async def test_error_frame_with_auth_status():
    stream = FakeStream([{"error": "Invalid api key", "status_code": 401}])

    with pytest.raises(SynthesisFailure) as excinfo:
        await SpeechSynthesizer("murf-key", connect=connect_to(stream)).synthesize("Hello")

    assert excinfo.value.cause is SynthesisCause.AUTHENTICATION


@pytest.mark.anyio
async def test_stream_without_audio_is_a_failure():
    stream = FakeStream([{"final": True}])

    with pytest.raises(SynthesisFailure) as excinfo:
        await SpeechSynthesizer("murf-key", connect=connect_to(stream)).synthesize("Hello")

    assert excinfo.value.cause is SynthesisCause.GENERIC


def test_classify_plain_errors_as_generic():
    assert classify_synthesis_error(ConnectionResetError()) is SynthesisCause.GENERIC
    assert classify_synthesis_error(HandshakeRejected(500)) is SynthesisCause.GENERIC
    assert classify_synthesis_error(HandshakeRejected(401)) is SynthesisCause.AUTHENTICATION
