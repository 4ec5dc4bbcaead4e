from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response
from voicechat.routes.deps import get_services
from voicechat.schemas.chat_schemas import SpeechRequest
from voicechat.services.registry import Services
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/audio")
async def speak(request: Request, services: Services = Depends(get_services)):
    """Synthesize `{"text": ...}` and answer with the raw WAV bytes."""
    try:
        speech = SpeechRequest.model_validate(await request.json())
        audio = await services.synthesizer.synthesize(speech.text)
    except Exception as e:
        logger.error(f"Error generating audio: {e}")
        return JSONResponse(content={"error": "Error generating audio"}, status_code=500)

    return Response(content=audio, media_type="audio/wav")
