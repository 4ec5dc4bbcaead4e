import asyncio
import io
from enum import Enum
from typing import Callable, Optional
import pygame
from voicechat.client.orchestrator import PlaybackError

SAMPLE_RATE = 24000


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"


class Player:
    """
    Plays one WAV clip at a time through pygame's mixer.

    `on_finished` fires only when a clip runs to its end; `stop()` returns to
    idle without calling it.
    """

    def __init__(self, sample_rate: int = SAMPLE_RATE, poll_interval: float = 0.05, mixer=None):
        self.mixer = mixer or pygame.mixer
        self.mixer.init(frequency=sample_rate)
        self.poll_interval = poll_interval
        self.state = PlaybackState.IDLE
        self._channel = None
        self._watcher: Optional[asyncio.Task] = None

    @property
    def is_playing(self) -> bool:
        return self.state is PlaybackState.PLAYING

    def play(self, audio: bytes, on_finished: Callable[[], None]) -> None:
        self.stop()

        sound = self.mixer.Sound(file=io.BytesIO(audio))
        channel = sound.play()
        if channel is None:
            raise PlaybackError("no free mixer channel")

        self._channel = channel
        self.state = PlaybackState.PLAYING
        self._watcher = asyncio.get_running_loop().create_task(self._wait(channel, on_finished))

    async def _wait(self, channel, on_finished: Callable[[], None]):
        while channel.get_busy():
            await asyncio.sleep(self.poll_interval)

        self._reset()
        on_finished()

    def _reset(self):
        self._channel = None
        self._watcher = None
        self.state = PlaybackState.IDLE

    def stop(self) -> None:
        if self._watcher is not None:
            self._watcher.cancel()
        if self._channel is not None:
            self._channel.stop()
        self._reset()

    def close(self):
        self.stop()
        self.mixer.quit()
