import base64
import json
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Protocol, Sequence, Tuple, Union
import httpx
from voicechat.schemas.chat_schemas import ConversationTurn

logger = logging.getLogger(__name__)

AUDIO_PLACEHOLDER = "Audio input received"
AUDIO_FILENAME = "audio.wav"


class SubmissionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class NoticeKind(str, Enum):
    RATE_LIMITED = "rate_limited"
    FAILED = "failed"
    PLAYBACK = "playback"


@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    message: str


class AudioPlayer(Protocol):
    def play(self, audio: bytes, on_finished: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class PlaybackError(Exception):
    pass


class ChatClient:
    """
    Browser-side half of the chat loop: posts text or a finished speech segment
    with the conversation so far, records both turns once the reply arrives and
    plays the synthesized audio.

    Replies are appended in the order they resolve, so overlapping submissions
    can land out of submission order.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        player: Optional[AudioPlayer] = None,
        endpoint: str = "/api",
        on_notice: Optional[Callable[[Notice], None]] = None,
        on_state_change: Optional[Callable[[SubmissionState], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.http = http
        self.player = player
        self.endpoint = endpoint
        self.on_notice = on_notice
        self.on_state_change = on_state_change
        self.clock = clock
        self.state = SubmissionState.IDLE
        self._history: List[ConversationTurn] = []

    @property
    def history(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self._history)

    def _set_state(self, state: SubmissionState):
        self.state = state
        if self.on_state_change:
            self.on_state_change(state)

    def _notify(self, kind: NoticeKind, message: str):
        logger.warning(f"[{kind.value}] {message}")
        if self.on_notice:
            self.on_notice(Notice(kind, message))

    def _fail(self, kind: NoticeKind, message: str) -> bool:
        self._notify(kind, message)
        self._set_state(SubmissionState.FAILED)
        self._set_state(SubmissionState.IDLE)
        return False

    @staticmethod
    def build_form(data: Union[str, bytes], history: Sequence[ConversationTurn]) -> dict:
        messages = [turn.model_dump_json(exclude_none=True) for turn in history]

        if isinstance(data, str):
            return {"data": {"input": data, "message": messages}}

        return {
            "data": {"message": messages},
            "files": {"input": (AUDIO_FILENAME, data, "audio/wav")},
        }

    async def submit(self, data: Union[str, bytes]) -> bool:
        """Send one turn. Returns True when the reply was added to the history."""
        form = self.build_form(data, self._history)

        self._set_state(SubmissionState.PENDING)
        submitted_at = self.clock()

        try:
            response = await self.http.post(self.endpoint, **form)
        except httpx.HTTPError as e:
            logger.error(f"Error submitting data: {e}")
            return self._fail(NoticeKind.FAILED, "An error occurred while submitting your request.")

        if response.status_code == 429:
            return self._fail(NoticeKind.RATE_LIMITED, "Too many requests. Please try again later.")

        if not response.is_success:
            return self._fail(NoticeKind.FAILED, response.text or "An error occurred.")

        try:
            payload = response.json()
        except json.JSONDecodeError:
            return self._fail(NoticeKind.FAILED, "An error occurred.")

        if not payload.get("text"):
            return self._fail(NoticeKind.FAILED, payload.get("error") or "An error occurred.")

        latency = int((self.clock() - submitted_at) * 1000)

        self._history.extend([
            ConversationTurn(role="user", content=data if isinstance(data, str) else AUDIO_PLACEHOLDER),
            ConversationTurn(role="assistant", content=payload["text"], latency=latency),
        ])
        self._set_state(SubmissionState.SUCCEEDED)

        self.play(payload.get("audioBuffer"))
        self._set_state(SubmissionState.IDLE)
        return True

    def play(self, audio_buffer: Optional[str]):
        if self.player is None:
            return

        try:
            if not audio_buffer:
                raise PlaybackError("Audio buffer is missing")
            audio = base64.b64decode(audio_buffer, validate=True)
            self.player.play(audio, lambda: logger.info("Audio playback completed."))
        except Exception as e:
            logger.error(f"Error playing audio: {e}")
            self._notify(NoticeKind.PLAYBACK, "Error generating voice; TTS API limit likely.")
