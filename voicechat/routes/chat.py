from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, Response
from voicechat.routes.deps import get_services
from voicechat.services.pipeline import ChatPipeline
from voicechat.services.registry import Services
from voicechat.utils.errors import TranscriptionFailure, ValidationError
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("")
async def chat(request: Request, services: Services = Depends(get_services)):
    pipeline = ChatPipeline(services)

    try:
        body = await pipeline.handle(await request.form(), request.headers)
    except ValidationError as e:
        logger.info(f"Rejected chat form: {e}")
        return PlainTextResponse("Invalid request", status_code=400)
    except TranscriptionFailure:
        return PlainTextResponse("Invalid audio", status_code=400)

    return Response(content=body, media_type="application/json")
