"""Named sound channel players."""

from dataclasses import dataclass, field
from typing import Iterable

from fabula.errors import AudioError


@dataclass
class ChannelPlayer:
    """Playback state of one sound channel."""

    name: str
    track: str | None = None

    @property
    def is_playing(self) -> bool:
        return self.track is not None

    def play(self, track: str) -> None:
        self.track = track

    def stop(self) -> None:
        self.track = None


@dataclass
class Audio:
    """Channel players keyed by channel name, in content order."""

    players: dict[str, ChannelPlayer] = field(default_factory=dict)

    @classmethod
    def from_channels(cls, channels: Iterable[str]) -> "Audio":
        return cls(players={name: ChannelPlayer(name) for name in channels})

    def get_player(self, name: str) -> ChannelPlayer:
        """Return the player for a channel."""
        player = self.players.get(name)
        if player is None:
            raise AudioError(f"Invalid sound channel '{name}'")
        return player
