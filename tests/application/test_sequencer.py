"""Tests for PlaybackSequencer next/previous resolution."""

import pytest

from setlist.application.services import PlaybackSequencer
from setlist.domain.playback import PlaybackMode, PlaybackQueue
from tests.fixtures.models import make_track


class StaticOrdering:
    """Visible ordering backed by a plain list the test can mutate."""

    def __init__(self, tracks):
        self.tracks = list(tracks)

    def visible_tracks(self):
        return list(self.tracks)


@pytest.fixture
def ordering(tracks):
    return StaticOrdering(tracks)


@pytest.fixture
def sequencer(ordering, seeded_rng, observer):
    return PlaybackSequencer(ordering, rng=seeded_rng, observer=observer)


class TestAutomaticSequencing:
    def test_default_walks_forward_and_stops(self, sequencer, tracks):
        t1, t2, t3 = tracks

        assert sequencer.next(t1) == t2
        assert sequencer.next(t2) == t3
        assert sequencer.next(t3) is None

    def test_repeat_wraps_around(self, sequencer, tracks):
        sequencer.set_mode(PlaybackMode.REPEAT)

        assert sequencer.next(tracks[2]) == tracks[0]
        assert sequencer.prev(tracks[0]) == tracks[2]

    def test_repeat_track_returns_current(self, sequencer, tracks):
        sequencer.set_mode("repeat_track")

        assert sequencer.next(tracks[1]) == tracks[1]
        assert sequencer.prev(tracks[1]) == tracks[1]

    def test_shuffle_picks_a_visible_track(self, sequencer, tracks):
        sequencer.set_mode(PlaybackMode.SHUFFLE)

        for _ in range(20):
            assert sequencer.next(tracks[0]) in tracks

    def test_shuffle_is_reproducible_with_same_seed(self, tracks):
        import random

        def run():
            seq = PlaybackSequencer(
                StaticOrdering(tracks),
                rng=random.Random(99),
                mode=PlaybackMode.SHUFFLE,
            )
            return [seq.next(tracks[0]).id for _ in range(10)]

        assert run() == run()

    def test_default_previous_stops_at_start(self, sequencer, tracks):
        assert sequencer.prev(tracks[1]) == tracks[0]
        assert sequencer.prev(tracks[0]) is None

    def test_empty_ordering_has_nothing_to_play(self, observer):
        sequencer = PlaybackSequencer(StaticOrdering([]), observer=observer)

        assert sequencer.next(None) is None
        assert sequencer.next(make_track(1)) is None
        assert sequencer.prev(make_track(1)) is None

    def test_hidden_current_track_has_no_neighbours(self, sequencer, ordering, tracks):
        ordering.tracks = [tracks[0], tracks[2]]

        assert sequencer.next(tracks[1]) is None
        assert sequencer.prev(tracks[1]) is None

    def test_navigation_follows_visible_order(self, sequencer, ordering, tracks):
        ordering.tracks = [tracks[2], tracks[0], tracks[1]]

        assert sequencer.next(tracks[2]) == tracks[0]
        assert sequencer.prev(tracks[2]) is None


class TestBootstrap:
    def test_nothing_loaded_starts_at_top(self, sequencer, tracks):
        assert sequencer.next(None) == tracks[0]

    def test_nothing_loaded_resumes_last_played(self, sequencer, tracks):
        sequencer.set_last_played(tracks[1])

        assert sequencer.next(None) == tracks[1]

    def test_last_played_no_longer_visible_starts_at_top(
        self, sequencer, ordering, tracks
    ):
        sequencer.set_last_played(tracks[1])
        ordering.tracks = [tracks[2], tracks[0]]

        assert sequencer.next(None) == tracks[2]

    def test_previous_with_nothing_loaded_is_none(self, sequencer):
        assert sequencer.prev(None) is None


class TestManualQueue:
    def test_queue_wins_in_every_mode(self, ordering, tracks):
        for mode in PlaybackMode:
            sequencer = PlaybackSequencer(ordering, mode=mode)
            sequencer.enqueue(tracks[0])

            assert sequencer.next(tracks[2]) == tracks[0]

    def test_queue_drains_in_fifo_order(self, sequencer, tracks):
        t1, t2, t3 = tracks
        sequencer.enqueue(t3)
        sequencer.enqueue(t1)

        assert sequencer.next(t2) == t3
        assert sequencer.queue_position(t1) == 1
        assert sequencer.next(t3) == t1
        assert sequencer.next(t1) == t2

    def test_queued_track_plays_even_when_hidden(self, sequencer, ordering, tracks):
        ordering.tracks = [tracks[0]]
        sequencer.enqueue(tracks[2])

        assert sequencer.next(tracks[0]) == tracks[2]

    def test_queue_wins_when_nothing_is_loaded(self, sequencer, tracks):
        sequencer.enqueue(tracks[2])

        assert sequencer.next(None) == tracks[2]

    def test_previous_ignores_queue(self, sequencer, tracks):
        sequencer.enqueue(tracks[2])

        assert sequencer.prev(tracks[1]) == tracks[0]
        assert sequencer.queue_position(tracks[2]) == 1

    def test_shared_queue_is_used(self, ordering, tracks):
        queue = PlaybackQueue([tracks[1]])
        sequencer = PlaybackSequencer(ordering, queue=queue)

        assert sequencer.queue is queue
        assert sequencer.next(tracks[0]) == tracks[1]
        assert queue.is_empty()

    def test_clear_queue_returns_cleared_tracks(self, sequencer, tracks):
        sequencer.enqueue_all(tracks)

        assert sequencer.clear_queue() == tracks
        assert sequencer.queue_position(tracks[0]) == -1


class TestNotifications:
    def test_enqueue_reports_positions(self, sequencer, observer, tracks):
        sequencer.enqueue(tracks[1])
        sequencer.enqueue(tracks[0])

        assert observer.named("queue_changed") == [
            {"t2": 1},
            {"t2": 1, "t1": 2},
        ]

    def test_duplicate_enqueue_is_silent(self, sequencer, observer, tracks):
        sequencer.enqueue(tracks[0])
        sequencer.enqueue(tracks[0])

        assert len(observer.named("queue_changed")) == 1

    def test_dequeue_reports_renumbered_positions(self, sequencer, observer, tracks):
        sequencer.enqueue_all([tracks[1], tracks[0]])
        observer.events.clear()

        sequencer.next(tracks[2])

        assert observer.named("queue_changed") == [{"t1": 1}]

    def test_mode_change_notifies_once(self, sequencer, observer):
        sequencer.set_mode(PlaybackMode.SHUFFLE)
        sequencer.set_mode("shuffle")

        assert sequencer.mode is PlaybackMode.SHUFFLE
        assert observer.named("mode_changed") == [PlaybackMode.SHUFFLE]

    def test_last_played_always_notifies(self, sequencer, observer, tracks):
        sequencer.set_last_played(tracks[0])
        sequencer.set_last_played(tracks[0])

        assert sequencer.last_played == tracks[0]
        assert observer.named("last_played_changed") == [tracks[0], tracks[0]]

    def test_automatic_next_does_not_touch_queue_events(
        self, sequencer, observer, tracks
    ):
        sequencer.next(tracks[0])

        assert observer.events == []
