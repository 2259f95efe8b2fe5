"""Tests for track key derivation."""

import re

import pytest

from tunevote.domain.voting.track_key import SEPARATOR, make_track_key, split_track_key


class TestMakeTrackKey:
    """Tests for make_track_key."""

    def test_basic_key(self) -> None:
        assert make_track_key("The Beatles", "Hey Jude") == "thebeatles||heyjude"

    def test_lowercases(self) -> None:
        assert make_track_key("ARTIST NAME", "SONG TITLE") == "artistname||songtitle"

    @pytest.mark.parametrize(
        "artist,title,expected",
        [
            ("Artist's Name", "Song's Title!", "artistsname||songstitle"),
            ("Blink-182", "All The Small Things", "blink182||allthesmallthings"),
            ("Artist, The", "Song: Subtitle", "artistthe||songsubtitle"),
            ("Artist (Band)", "Song (Live Version)", "artistband||songliveversion"),
            ("Artist & Band", "Song & Dance", "artistband||songdance"),
            ("Up-Tempo Band", "Fast-Paced Song", "uptempoband||fastpacedsong"),
            (
                "The Rolling Stones",
                "(I Can't Get No) Satisfaction",
                "therollingstones||icantgetnosatisfaction",
            ),
        ],
    )
    def test_strips_punctuation_and_whitespace(self, artist, title, expected) -> None:
        assert make_track_key(artist, title) == expected

    def test_non_ascii_letters_removed(self) -> None:
        assert make_track_key("Artíst Nãme", "Sõng Títle") == "artstnme||sngttle"

    def test_empty_inputs_collapse_to_separator(self) -> None:
        assert make_track_key("", "") == "||"

    def test_all_non_ascii_collapses_to_separator(self) -> None:
        assert make_track_key("東京事変", "群青日和") == "||"

    def test_none_treated_as_empty(self) -> None:
        assert make_track_key(None, "Song") == "||song"

    def test_pipe_characters_in_input_survive(self) -> None:
        assert make_track_key("A|B", "C") == "a|b||c"

    def test_deterministic(self) -> None:
        first = make_track_key("The Beatles", "Yesterday")
        second = make_track_key("The Beatles", "Yesterday")
        assert first == second

    def test_distinct_tracks_distinct_keys(self) -> None:
        assert make_track_key("Artist 1", "Song 1") != make_track_key("Artist 2", "Song 2")

    @pytest.mark.parametrize(
        "artist,title",
        [
            ("  Spaced\tOut  ", "New\nLine"),
            ("Sigur Rós", "Hoppípolla"),
            ("!!!", "???"),
            ("AC/DC", "T.N.T."),
        ],
    )
    def test_output_alphabet(self, artist, title) -> None:
        key = make_track_key(artist, title)
        assert re.fullmatch(r"[a-z0-9|]*", key)
        assert SEPARATOR in key


class TestSplitTrackKey:
    """Tests for split_track_key."""

    def test_splits_on_separator(self) -> None:
        assert split_track_key("thebeatles||heyjude") == ("thebeatles", "heyjude")

    def test_no_separator(self) -> None:
        assert split_track_key("t1") == ("t1", "")
