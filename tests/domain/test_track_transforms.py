"""Tests for the filter and sort transforms that build visible orderings."""

from setlist.domain.entities import TrackList
from setlist.domain.transforms import (
    create_pipeline,
    filter_by_predicate,
    filter_by_text,
    matches_text,
    sort_by_attribute,
)
from tests.fixtures.models import make_track


def ids(tracklist: TrackList) -> list[str]:
    return [track.id for track in tracklist.tracks]


class TestFiltering:
    def test_filter_by_predicate_records_filtered_count(self, tracks):
        result = filter_by_predicate(lambda t: t.id != "t2", TrackList(tracks=tracks))

        assert ids(result) == ["t1", "t3"]
        assert result.metadata["filtered_out"] == 1

    def test_filter_is_curried(self, tracks):
        transform = filter_by_predicate(lambda t: t.id == "t3")

        assert ids(transform(TrackList(tracks=tracks))) == ["t3"]

    def test_text_filter_is_case_insensitive_over_all_fields(self):
        tracks = [
            make_track(1, title="Blue Monday"),
            make_track(2, artist="Joy Division", title="Atmosphere"),
            make_track(3, location="/music/blues/song.mp3", title="Song"),
            make_track(4, title="Other", album="Greatest"),
        ]

        assert ids(filter_by_text("BLUE", TrackList(tracks=tracks))) == ["t1", "t3"]
        assert ids(filter_by_text("division", TrackList(tracks=tracks))) == ["t2"]

    def test_blank_text_matches_everything(self, track):
        assert matches_text("   ")(track)

    def test_text_filter_accepts_patterns(self):
        tracks = [
            make_track(1, title="Blue Monday"),
            make_track(2, title="Blues Run the Game"),
            make_track(3, title="Atmosphere"),
        ]

        assert ids(filter_by_text(r"^blue\b", TrackList(tracks=tracks))) == ["t1"]
        assert ids(filter_by_text("monday|atmo", TrackList(tracks=tracks))) == [
            "t1",
            "t3",
        ]

    def test_invalid_pattern_matches_literally(self):
        live = make_track(1, title="Ceremony (live")
        studio = make_track(2, title="Ceremony")

        assert matches_text("(LIVE")(live)
        assert not matches_text("(live")(studio)

    def test_missing_fields_do_not_match(self):
        bare = make_track(1, title=None, artist=None, album=None)

        assert not matches_text("artist")(bare)


class TestSorting:
    def test_sort_by_attribute_name_is_case_insensitive(self):
        tracks = [
            make_track(1, title="beta"),
            make_track(2, title="Alpha"),
            make_track(3, title="gamma"),
        ]

        result = sort_by_attribute("title", tracklist=TrackList(tracks=tracks))

        assert ids(result) == ["t2", "t1", "t3"]
        assert result.metadata["sorted_by"] == "title"

    def test_missing_values_sort_last_in_both_directions(self):
        tracks = [
            make_track(1, album=None),
            make_track(2, album="B"),
            make_track(3, album="A"),
        ]

        ascending = sort_by_attribute("album", False, TrackList(tracks=tracks))
        descending = sort_by_attribute("album", True, TrackList(tracks=tracks))

        assert ids(ascending) == ["t3", "t2", "t1"]
        assert ids(descending) == ["t2", "t3", "t1"]

    def test_sort_is_stable(self):
        tracks = [make_track(i, artist="Same") for i in range(1, 5)]

        result = sort_by_attribute("artist", tracklist=TrackList(tracks=tracks))

        assert ids(result) == ["t1", "t2", "t3", "t4"]

    def test_sort_by_key_function(self):
        tracks = [make_track(1, duration_ms=300), make_track(2, duration_ms=100)]

        def by_duration(track):
            return track.duration_ms

        result = sort_by_attribute(by_duration, tracklist=TrackList(tracks=tracks))

        assert ids(result) == ["t2", "t1"]
        assert result.metadata["sorted_by"] == "by_duration"


class TestPipeline:
    def test_empty_pipeline_is_identity(self, tracks):
        tracklist = TrackList(tracks=tracks)

        assert create_pipeline()(tracklist) is tracklist

    def test_filter_then_sort(self):
        tracks = [
            make_track(1, title="b song"),
            make_track(2, title="other"),
            make_track(3, title="a song"),
        ]
        pipeline = create_pipeline(filter_by_text("song"), sort_by_attribute("title"))

        result = pipeline(TrackList(tracks=tracks))

        assert ids(result) == ["t3", "t1"]
        assert result.metadata["filtered_out"] == 1
