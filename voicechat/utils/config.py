import os
from dataclasses import dataclass
from typing import Mapping, Optional
from dotenv import load_dotenv
from voicechat.utils.errors import ConfigError

ASSEMBLYAI_API_KEY = "AssemblyAI_API_KEY"
GEMINI_API_KEY = "Gemini_API_KEY"
MURF_API_KEY = "MURF_API_KEY"

REQUIRED_KEYS = (GEMINI_API_KEY, ASSEMBLYAI_API_KEY, MURF_API_KEY)


@dataclass(frozen=True)
class Settings:
    gemini_api_key: str
    assemblyai_api_key: str
    murf_api_key: str
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read provider credentials from the environment (and a `.env` file, if present).
    Raises ConfigError listing every missing key.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    missing = [key for key in REQUIRED_KEYS if not environ.get(key)]
    if missing:
        raise ConfigError(f"Missing {', '.join(missing)}")

    return Settings(
        gemini_api_key=environ[GEMINI_API_KEY],
        assemblyai_api_key=environ[ASSEMBLYAI_API_KEY],
        murf_api_key=environ[MURF_API_KEY],
        log_level=environ.get("LOG_LEVEL", "INFO").upper(),
    )
