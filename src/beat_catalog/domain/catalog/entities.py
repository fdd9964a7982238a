"""Catalog Context Entities.

This module defines the Beat entity: a single catalog entry (an
instrumental with its metadata). Beats are immutable once loaded; a new
catalog load replaces them wholesale.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..result import MalformedPayloadError
from .value_objects import format_duration

REQUIRED_FIELDS = ("id", "title", "genre", "bpm", "key", "audioFile")


@dataclass(frozen=True, slots=True, kw_only=True)
class Beat:
    """
    Represents a single beat in the storefront catalog.

    A Beat is identified by its ``id``, which is unique and stable for the
    lifetime of a browsing session.
    """

    id: str
    title: str
    genre: str
    bpm: int
    key: str
    audio_file: str
    duration: str = ""
    price: str = ""
    tags: Tuple[str, ...] = field(default_factory=tuple)
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "unknown") -> "Beat":
        """Build a Beat from a wire record.

        Raises:
            MalformedPayloadError: If a required field is missing or invalid.
        """
        if not isinstance(data, dict):
            raise MalformedPayloadError(
                f"Beat record must be an object, got {type(data).__name__}", source=source
            )

        missing = [name for name in REQUIRED_FIELDS if data.get(name) in (None, "")]
        if missing:
            raise MalformedPayloadError(
                f"Beat record {data.get('id', '?')!r} is missing {', '.join(missing)}",
                source=source,
            )

        bpm = data["bpm"]
        if isinstance(bpm, bool) or (
            isinstance(bpm, float) and not (math.isfinite(bpm) and bpm.is_integer())
        ):
            raise MalformedPayloadError(f"Invalid bpm {bpm!r}", source=source)
        try:
            bpm = int(bpm)
        except (TypeError, ValueError, OverflowError):
            raise MalformedPayloadError(f"Invalid bpm {data['bpm']!r}", source=source)
        if bpm <= 0:
            raise MalformedPayloadError(f"bpm must be positive, got {bpm}", source=source)

        tags = data.get("tags") or []
        if not isinstance(tags, (list, tuple)):
            raise MalformedPayloadError(
                f"tags must be a list, got {type(tags).__name__}", source=source
            )

        duration = data.get("duration", "")
        if isinstance(duration, (int, float)) and not isinstance(duration, bool):
            if not math.isfinite(duration):
                raise MalformedPayloadError(f"Invalid duration {duration!r}", source=source)
            duration = format_duration(duration)

        return cls(
            id=str(data["id"]),
            title=str(data["title"]),
            genre=str(data["genre"]),
            bpm=bpm,
            key=str(data["key"]),
            audio_file=str(data["audioFile"]),
            duration=str(duration or ""),
            price=str(data.get("price") or ""),
            tags=tuple(str(tag) for tag in tags),
            description=data.get("description") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert the beat back to its wire representation."""
        return {
            "id": self.id,
            "title": self.title,
            "genre": self.genre,
            "bpm": self.bpm,
            "key": self.key,
            "duration": self.duration,
            "price": self.price,
            "audioFile": self.audio_file,
            "tags": list(self.tags),
            "description": self.description,
        }

    def has_tag(self, tag: str) -> bool:
        """Check if the beat carries a tag (case-insensitive)."""
        tag = tag.lower()
        return any(t.lower() == tag for t in self.tags)


def parse_beats(records: Iterable[Any], source: str = "unknown") -> List[Beat]:
    """Parse wire records into beats, rejecting duplicate ids.

    Raises:
        MalformedPayloadError: If any record is invalid or an id repeats.
    """
    beats: List[Beat] = []
    seen: set[str] = set()
    for record in records:
        beat = Beat.from_dict(record, source=source)
        if beat.id in seen:
            raise MalformedPayloadError(f"Duplicate beat id {beat.id!r}", source=source)
        seen.add(beat.id)
        beats.append(beat)
    return beats
