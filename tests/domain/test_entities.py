"""Domain layer tests for track and playlist entities."""

import attrs
import pytest

from setlist.domain.entities import Playlist, Track, TrackList
from tests.fixtures.models import make_track


class TestTrackEntity:
    """Identity, immutability and display rules of tracks."""

    def test_new_tracks_get_unique_ids(self):
        first = Track(location="/music/a.mp3")
        second = Track(location="/music/a.mp3")

        assert first.id != second.id
        assert first != second

    def test_equality_is_by_id_only(self, track):
        retitled = track.with_metadata(title="Other title", artist="Other artist")

        assert retitled == track
        assert hash(retitled) == hash(track)
        assert retitled.title == "Other title"

    def test_with_metadata_keeps_identity(self, track):
        changed = track.with_metadata(id="hijacked", album="New Album")

        assert changed.id == track.id
        assert changed.album == "New Album"

    def test_tracks_are_immutable(self, track):
        with pytest.raises(attrs.exceptions.FrozenInstanceError):
            track.title = "Changed"

    @pytest.mark.parametrize("location", ["", "   "])
    def test_blank_location_is_rejected(self, location):
        with pytest.raises(ValueError):
            Track(location=location)

    def test_display_title_prefers_title(self, track):
        assert track.display_title == "Track 1"

    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            ("/music/album/song.flac", "song.flac"),
            ("C:\\Music\\song.mp3", "song.mp3"),
            ("song.ogg", "song.ogg"),
        ],
    )
    def test_display_title_falls_back_to_file_name(self, location, expected):
        assert Track(location=location).display_title == expected


class TestPlaylistEntity:
    """Membership and ordering behaviour of playlists."""

    def test_playlist_creation_with_minimal_data(self):
        playlist = Playlist(name="Minimal Playlist")

        assert playlist.name == "Minimal Playlist"
        assert playlist.tracks == []
        assert playlist.id is None
        assert playlist.position == 0

    def test_duplicate_tracks_are_dropped_on_creation(self, track):
        playlist = Playlist(name="Dupes", tracks=[track, track.with_metadata(title="x")])

        assert playlist.track_count == 1

    def test_playlists_compare_by_identity(self):
        assert Playlist(name="Same") != Playlist(name="Same")

    def test_add_tracks_appends_and_skips_members(self, playlist, tracks):
        extra = make_track(4)

        added = playlist.add_tracks([tracks[0], extra])

        assert added == [extra]
        assert playlist.tracks == [*tracks, extra]

    def test_add_tracks_inserts_at_index(self, playlist, tracks):
        extra = make_track(4)

        playlist.add_tracks([extra], at=1)

        assert playlist.tracks == [tracks[0], extra, tracks[1], tracks[2]]

    def test_add_tracks_clamps_negative_index(self, playlist, tracks):
        extra = make_track(4)

        playlist.add_tracks([extra], at=-5)

        assert playlist.tracks[0] == extra

    def test_remove_tracks_returns_removed_in_order(self, playlist, tracks):
        removed = playlist.remove_tracks([tracks[2], tracks[0], make_track(9)])

        assert removed == [tracks[0], tracks[2]]
        assert playlist.tracks == [tracks[1]]

    def test_clear_returns_every_track(self, playlist, tracks):
        assert playlist.clear() == tracks
        assert len(playlist) == 0

    def test_index_of_and_contains(self, playlist, tracks):
        assert playlist.index_of(tracks[1]) == 1
        assert playlist.index_of(make_track(9)) == -1
        assert playlist.index_of(None) == -1
        assert playlist.contains(tracks[2])

    def test_iteration_is_over_a_snapshot(self, playlist, tracks):
        for track in playlist:
            playlist.remove_tracks([track])

        assert playlist.track_count == 0

    def test_rename_rejects_blank_names(self, playlist):
        with pytest.raises(ValueError):
            playlist.rename("  ")

        playlist.rename("Renamed")
        assert playlist.name == "Renamed"


class TestTrackList:
    def test_from_playlist_copies_tracks(self, playlist):
        tracklist = TrackList.from_playlist(playlist)
        playlist.clear()

        assert len(tracklist.tracks) == 3
        assert tracklist.metadata["source_playlist_name"] == "Test Playlist"

    def test_with_metadata_does_not_mutate_original(self, tracks):
        original = TrackList(tracks=tracks)

        updated = original.with_metadata("key", "value")

        assert updated.metadata == {"key": "value"}
        assert original.metadata == {}
