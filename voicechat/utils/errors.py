from enum import Enum


class VoiceChatError(Exception):
    pass


class ConfigError(VoiceChatError):
    pass


class ValidationError(VoiceChatError):
    """Malformed chat form. Answered with 400 before any provider is called."""


class TranscriptionFailure(VoiceChatError):
    """Audio could not be turned into a transcript. Answered with 400."""


class CompletionFailure(VoiceChatError):
    """The language model produced no reply. Not recovered."""


class SynthesisCause(str, Enum):
    AUTHENTICATION = "authentication"
    GENERIC = "generic"


class SynthesisFailure(VoiceChatError):
    def __init__(self, cause: SynthesisCause, message: str = ""):
        super().__init__(message or f"speech synthesis failed ({cause.value})")
        self.cause = cause
