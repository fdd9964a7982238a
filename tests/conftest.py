"""Shared fixtures for beat catalog tests."""

import pytest

from beat_catalog.domain.catalog.entities import Beat, parse_beats
from beat_catalog.infrastructure.sources.sample_source import SAMPLE_BEATS


def make_beat(beat_id, genre="trap", **overrides) -> Beat:
    """Build a beat with sensible defaults."""
    fields = dict(
        id=str(beat_id),
        title=f"Beat {beat_id}",
        genre=genre,
        bpm=120,
        key="C Minor",
        audio_file=f"beat-{beat_id}.mp3",
        duration="3:00",
        price="$4.99",
        tags=(),
    )
    fields.update(overrides)
    return Beat(**fields)


@pytest.fixture
def sample_beats():
    """The six built-in sample beats, parsed."""
    return parse_beats(SAMPLE_BEATS)


@pytest.fixture
def many_beats():
    """Thirty trap/drill beats, enough for three pages of twelve."""
    return [make_beat(i, genre="trap" if i % 2 else "drill") for i in range(1, 31)]


@pytest.fixture
def beat_factory():
    return make_beat
