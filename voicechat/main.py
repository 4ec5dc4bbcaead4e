from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from voicechat.routes import audio, chat
from voicechat.services.registry import Services, build_services
from voicechat.utils.config import load_settings
from voicechat.utils.logger import setup_logger

logger = setup_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "services", None) is None:
        # missing credentials raise ConfigError here and abort startup
        settings = load_settings()
        logger.setLevel(settings.log_level)
        app.state.services = build_services(settings)
        logger.info("Provider clients initialized")
    yield


def create_app(services: Optional[Services] = None) -> FastAPI:
    app = FastAPI(title="Voice Chat", lifespan=lifespan)
    app.state.services = services

    app.include_router(chat.router, prefix="/api", tags=["Chat"])
    app.include_router(audio.router, prefix="/api", tags=["Speech"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000, log_level="info")
