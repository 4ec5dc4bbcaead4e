from typing import List
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import FormData, UploadFile
from voicechat.schemas.chat_schemas import AudioInput, ConversationTurn, IncomingRequest
from voicechat.utils.errors import ValidationError


async def parse_chat_form(form: FormData) -> IncomingRequest:
    """
    Turn the chat form into an IncomingRequest.

    `input` is either a text field or an uploaded audio file; every repeated
    `message` field is a JSON-encoded ConversationTurn, in chronological order.
    """
    raw_input = form.get("input")

    if isinstance(raw_input, UploadFile):
        data = await raw_input.read()
        user_input = AudioInput(
            filename=raw_input.filename,
            content_type=raw_input.content_type,
            data=data,
        )
    elif isinstance(raw_input, str) and raw_input.strip():
        user_input = raw_input
    else:
        raise ValidationError("missing input")

    history: List[ConversationTurn] = []
    for raw in form.getlist("message"):
        if not isinstance(raw, str):
            raise ValidationError("message must be a JSON string")
        try:
            history.append(ConversationTurn.model_validate_json(raw))
        except PydanticValidationError as e:
            raise ValidationError(f"invalid message: {e.error_count()} error(s)") from e

    return IncomingRequest(input=user_input, history=tuple(history))
