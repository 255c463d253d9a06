"""Tests for track filters."""

from profilter.domain.dtos import Album, Artist, Track
from profilter.domain.filters import Filter, FilterKind, evaluate, passes_all


def make_track(album: str = "Abbey Road", artists: tuple[str, ...] = ("The Beatles",)) -> Track:
    return Track(
        id="t1",
        name="Song",
        album=Album(id="a1", name=album),
        artists=tuple(Artist(id=f"ar{i}", name=name) for i, name in enumerate(artists)),
    )


class TestAlbumNameFilter:
    """Test the album-name variant."""

    def test_exact_match(self) -> None:
        """Same album name passes."""
        assert evaluate(Filter.album_name("Abbey Road"), make_track())

    def test_case_sensitive(self) -> None:
        """Different case does not pass."""
        assert not evaluate(Filter.album_name("abbey road"), make_track())

    def test_constructor_tag(self) -> None:
        """The helper builds the tagged variant."""
        assert Filter.album_name("X") == Filter(FilterKind.ALBUM_NAME, "X")


class TestArtistNameFilter:
    """Test the artist-name variant (every credited artist must match)."""

    def test_single_artist_match(self) -> None:
        """Sole artist with that name passes."""
        assert evaluate(Filter.artist_name("The Beatles"), make_track())

    def test_multi_artist_requires_all(self) -> None:
        """A collaboration fails even though one artist matches."""
        track = make_track(artists=("Queen", "David Bowie"))
        assert not evaluate(Filter.artist_name("Queen"), track)

    def test_all_artists_same_name(self) -> None:
        """Passes when every credit carries the name."""
        track = make_track(artists=("Queen", "Queen"))
        assert evaluate(Filter.artist_name("Queen"), track)

    def test_no_artists_passes(self) -> None:
        """Nothing credited means nothing fails the check."""
        assert evaluate(Filter.artist_name("Anyone"), make_track(artists=()))


class TestPassesAll:
    """Test AND composition."""

    def test_no_filters(self) -> None:
        """Zero filters keep every track."""
        assert passes_all([], make_track())

    def test_all_must_pass(self) -> None:
        """One failing filter rejects the track."""
        filters = [Filter.album_name("Abbey Road"), Filter.artist_name("Queen")]
        assert not passes_all(filters, make_track())

    def test_both_pass(self) -> None:
        """Every filter accepting keeps the track."""
        filters = [Filter.album_name("Abbey Road"), Filter.artist_name("The Beatles")]
        assert passes_all(filters, make_track())

    def test_short_circuits(self, mocker) -> None:  # type: ignore[no-untyped-def]
        """Evaluation stops at the first rejection."""
        spy = mocker.patch(
            "profilter.domain.filters.evaluate",
            side_effect=[False, True],
        )
        filters = [Filter.album_name("x"), Filter.album_name("y")]
        assert not passes_all(filters, make_track())
        assert spy.call_count == 1
