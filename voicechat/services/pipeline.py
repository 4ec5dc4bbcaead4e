import logging
from typing import Mapping, Optional
from starlette.datastructures import FormData
from voicechat.services.assembler import assemble_response
from voicechat.services.caller_context import caller_context_from_headers
from voicechat.services.form_parser import parse_chat_form
from voicechat.services.prompt import compose_messages
from voicechat.services.registry import Services
from voicechat.utils.errors import SynthesisFailure, TranscriptionFailure
from voicechat.utils.timing import timed

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-vercel-id"


class ChatPipeline:
    """
    One chat turn: validate the form, transcribe audio input, ask the language
    model, then synthesize the reply. Each stage waits for the previous one.

    ValidationError and TranscriptionFailure stop the turn before the language
    model is called. CompletionFailure propagates. SynthesisFailure only drops
    the audio from the response.
    """

    def __init__(self, services: Services):
        self.services = services

    async def resolve_transcript(self, user_input) -> str:
        if isinstance(user_input, str):
            return user_input

        transcript = await self.services.transcriber.transcribe(user_input.data)
        if not transcript:
            raise TranscriptionFailure("Invalid audio")
        return transcript

    async def synthesize(self, text: str) -> Optional[bytes]:
        try:
            return await self.services.synthesizer.synthesize(text)
        except SynthesisFailure as e:
            logger.error(f"Error generating audio ({e.cause.value}): {e}")
            return None

    async def handle(self, form: FormData, headers: Mapping[str, str]) -> bytes:
        request_id = headers.get(REQUEST_ID_HEADER) or "local"

        with timed(f"transcribe {request_id}"):
            incoming = await parse_chat_form(form)
            transcript = await self.resolve_transcript(incoming.input)

        with timed(f"text completion {request_id}"):
            messages = compose_messages(incoming.history, transcript, caller_context_from_headers(headers))
            reply = await self.services.completion.complete(messages)

        audio = await self.synthesize(reply)
        return assemble_response(reply, audio)
