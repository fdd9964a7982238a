"""Built-in fallback catalog used when no other source answers."""

import copy
from typing import Any, Dict, List, Optional

from ...domain.result import Result, SourceError, success
from .base import CatalogSource

SAMPLE_BEATS: List[Dict[str, Any]] = [
    {
        "id": 1,
        "title": "Midnight Vibes",
        "genre": "trap",
        "bpm": 140,
        "key": "C Minor",
        "duration": "3:45",
        "price": "$4.99",
        "audioFile": "sample-beat-1.mp3",
        "tags": ["dark", "atmospheric", "hard"],
        "description": "Dark trap beat with atmospheric pads and hard 808s",
    },
    {
        "id": 2,
        "title": "Ocean Dreams",
        "genre": "r&b",
        "bpm": 85,
        "key": "F Major",
        "duration": "4:12",
        "price": "$4.99",
        "audioFile": "sample-beat-2.mp3",
        "tags": ["smooth", "romantic", "chill"],
        "description": "Smooth R&B instrumental perfect for romantic tracks",
    },
    {
        "id": 3,
        "title": "Street Kings",
        "genre": "hip-hop",
        "bpm": 95,
        "key": "G Minor",
        "duration": "3:28",
        "price": "$4.99",
        "audioFile": "sample-beat-3.mp3",
        "tags": ["classic", "boom bap", "street"],
        "description": "Classic boom bap hip hop with street vibes",
    },
    {
        "id": 4,
        "title": "Drill Sergeant",
        "genre": "drill",
        "bpm": 145,
        "key": "D Minor",
        "duration": "2:58",
        "price": "$4.99",
        "audioFile": "sample-beat-4.mp3",
        "tags": ["aggressive", "UK drill", "intense"],
        "description": "Aggressive UK drill beat with sliding 808s",
    },
    {
        "id": 5,
        "title": "Sunset Boulevard",
        "genre": "trap",
        "bpm": 130,
        "key": "A Minor",
        "duration": "3:33",
        "price": "$4.99",
        "audioFile": "sample-beat-5.mp3",
        "tags": ["melodic", "sunset", "emotional"],
        "description": "Melodic trap beat with emotional piano leads",
    },
    {
        "id": 6,
        "title": "Neon Nights",
        "genre": "hip-hop",
        "bpm": 88,
        "key": "E Minor",
        "duration": "4:05",
        "price": "$4.99",
        "audioFile": "sample-beat-6.mp3",
        "tags": ["retro", "synthwave", "night"],
        "description": "Retro-inspired hip hop with synthwave elements",
    },
]


class SampleSource(CatalogSource):
    """Serves a fixed catalog embedded in the package."""

    name = "sample"

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self._records = records if records is not None else SAMPLE_BEATS

    async def fetch(self) -> Result[Any, SourceError]:
        return success(copy.deepcopy(self._records))
