import base64
import json
from voicechat.services.assembler import assemble_response


def test_audio_is_base64_encoded():
    body = json.loads(assemble_response("Hi there", b"RIFF\x00\x01wav"))

    assert body == {"text": "Hi there", "audioBuffer": base64.b64encode(b"RIFF\x00\x01wav").decode()}


def test_missing_audio_is_null():
    assert json.loads(assemble_response("Hi there", None)) == {"text": "Hi there", "audioBuffer": None}


def test_assembly_is_deterministic():
    first = assemble_response("Olá, tudo bem?", b"\xff" * 32)
    second = assemble_response("Olá, tudo bem?", b"\xff" * 32)

    assert first == second
