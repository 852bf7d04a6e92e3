"""Playback order policy.

Pure decision functions mapping (reference index, ordering size, mode) to the
index that should play next or previously. Randomness comes from an explicit
source so shuffle is reproducible under a seed.
"""

from enum import StrEnum, auto
from typing import Protocol

from setlist.domain.exceptions import InvalidPlaybackModeError


class PlaybackMode(StrEnum):
    """Automatic sequencing policies."""

    DEFAULT = auto()  # sequential, stops at the end
    REPEAT = auto()  # sequential, wraps around
    REPEAT_TRACK = auto()  # same track again
    SHUFFLE = auto()  # uniform random pick

    @classmethod
    def parse(cls, text: "str | PlaybackMode") -> "PlaybackMode":
        """Parse a mode from its value or name, case-insensitively."""
        if isinstance(text, cls):
            return text
        normalized = str(text).strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise InvalidPlaybackModeError(
                f"Unknown playback mode {text!r}; expected one of: {valid}"
            ) from None


class RandomSource(Protocol):
    """The slice of ``random.Random`` the shuffle policy needs."""

    def randrange(self, stop: int) -> int: ...


def _in_range(index: int, size: int) -> bool:
    return size > 0 and 0 <= index < size


def resolve_next(
    index: int, size: int, mode: PlaybackMode, rng: RandomSource
) -> int | None:
    """Index to play after ``index``, or None when there is no next track."""
    if not _in_range(index, size):
        return None

    match mode:
        case PlaybackMode.DEFAULT:
            return index + 1 if index + 1 < size else None
        case PlaybackMode.REPEAT:
            return (index + 1) % size
        case PlaybackMode.REPEAT_TRACK:
            return index
        case PlaybackMode.SHUFFLE:
            return rng.randrange(size)
    return None


def resolve_prev(
    index: int, size: int, mode: PlaybackMode, rng: RandomSource
) -> int | None:
    """Index to play before ``index``, or None when there is no previous track."""
    if not _in_range(index, size):
        return None

    match mode:
        case PlaybackMode.DEFAULT:
            return index - 1 if index - 1 >= 0 else None
        case PlaybackMode.REPEAT:
            return (index - 1 + size) % size
        case PlaybackMode.REPEAT_TRACK:
            return index
        case PlaybackMode.SHUFFLE:
            return rng.randrange(size)
    return None
