"""Tests for the pure next/previous index policy."""

import random

import pytest

from setlist.domain.exceptions import InvalidPlaybackModeError
from setlist.domain.playback import PlaybackMode, resolve_next, resolve_prev


class FixedRandom:
    """Random source that always returns the same value."""

    def __init__(self, value: int) -> None:
        self.value = value
        self.calls: list[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        return self.value


@pytest.fixture
def rng():
    return random.Random(42)


class TestPlaybackModeParsing:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("default", PlaybackMode.DEFAULT),
            ("REPEAT", PlaybackMode.REPEAT),
            ("repeat-track", PlaybackMode.REPEAT_TRACK),
            ("Repeat Track", PlaybackMode.REPEAT_TRACK),
            (" shuffle ", PlaybackMode.SHUFFLE),
        ],
    )
    def test_parse_accepts_common_spellings(self, text, expected):
        assert PlaybackMode.parse(text) is expected

    def test_parse_passes_modes_through(self):
        assert PlaybackMode.parse(PlaybackMode.REPEAT) is PlaybackMode.REPEAT

    def test_parse_rejects_unknown_mode(self):
        with pytest.raises(InvalidPlaybackModeError, match="loop"):
            PlaybackMode.parse("loop")

    def test_invalid_mode_is_a_value_error(self):
        with pytest.raises(ValueError):
            PlaybackMode.parse("")


class TestResolveNext:
    def test_default_advances(self, rng):
        assert resolve_next(0, 3, PlaybackMode.DEFAULT, rng) == 1
        assert resolve_next(1, 3, PlaybackMode.DEFAULT, rng) == 2

    def test_default_has_no_next_at_end(self, rng):
        assert resolve_next(2, 3, PlaybackMode.DEFAULT, rng) is None

    def test_repeat_wraps_to_start(self, rng):
        assert resolve_next(2, 3, PlaybackMode.REPEAT, rng) == 0

    def test_repeat_track_stays(self, rng):
        for _ in range(5):
            assert resolve_next(1, 3, PlaybackMode.REPEAT_TRACK, rng) == 1

    def test_shuffle_uses_random_source(self):
        source = FixedRandom(4)
        assert resolve_next(0, 7, PlaybackMode.SHUFFLE, source) == 4
        assert source.calls == [7]

    def test_shuffle_stays_in_range(self, rng):
        picks = {resolve_next(0, 5, PlaybackMode.SHUFFLE, rng) for _ in range(200)}
        assert picks <= set(range(5))

    def test_shuffle_is_reproducible_with_seed(self):
        first = [resolve_next(0, 10, PlaybackMode.SHUFFLE, random.Random(7)) for _ in range(3)]
        second = [resolve_next(0, 10, PlaybackMode.SHUFFLE, random.Random(7)) for _ in range(3)]
        assert first == second

    @pytest.mark.parametrize("mode", list(PlaybackMode))
    def test_empty_ordering_has_no_next(self, mode, rng):
        assert resolve_next(0, 0, mode, rng) is None

    @pytest.mark.parametrize("mode", list(PlaybackMode))
    def test_missing_reference_has_no_next(self, mode, rng):
        assert resolve_next(-1, 3, mode, rng) is None


class TestResolvePrev:
    def test_default_steps_back(self, rng):
        assert resolve_prev(2, 3, PlaybackMode.DEFAULT, rng) == 1

    def test_default_has_no_previous_at_start(self, rng):
        assert resolve_prev(0, 3, PlaybackMode.DEFAULT, rng) is None

    def test_repeat_wraps_to_end(self, rng):
        assert resolve_prev(0, 3, PlaybackMode.REPEAT, rng) == 2

    def test_repeat_track_stays(self, rng):
        assert resolve_prev(2, 3, PlaybackMode.REPEAT_TRACK, rng) == 2

    def test_shuffle_uses_random_source(self):
        assert resolve_prev(2, 3, PlaybackMode.SHUFFLE, FixedRandom(0)) == 0

    @pytest.mark.parametrize("mode", list(PlaybackMode))
    def test_empty_ordering_has_no_previous(self, mode, rng):
        assert resolve_prev(0, 0, mode, rng) is None

    @pytest.mark.parametrize("mode", list(PlaybackMode))
    def test_missing_reference_has_no_previous(self, mode, rng):
        assert resolve_prev(-1, 3, mode, rng) is None


class TestPolicyProperties:
    @pytest.mark.parametrize("size", [1, 2, 5, 17])
    def test_repeat_round_trip_returns_to_start(self, size, rng):
        """Next then previous under REPEAT lands on the original index."""
        for index in range(size):
            forward = resolve_next(index, size, PlaybackMode.REPEAT, rng)
            assert resolve_prev(forward, size, PlaybackMode.REPEAT, rng) == index

    @pytest.mark.parametrize("size", [1, 2, 5])
    def test_default_ends_have_no_result(self, size, rng):
        assert resolve_next(size - 1, size, PlaybackMode.DEFAULT, rng) is None
        assert resolve_prev(0, size, PlaybackMode.DEFAULT, rng) is None

    def test_single_track_repeat_points_at_itself(self, rng):
        assert resolve_next(0, 1, PlaybackMode.REPEAT, rng) == 0
        assert resolve_prev(0, 1, PlaybackMode.REPEAT, rng) == 0
