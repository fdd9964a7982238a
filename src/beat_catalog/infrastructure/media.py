"""
Media URL resolution.

Turns a beat's ``audioFile`` into something a player or a download link
can use: absolute URLs pass through, bare filenames are served from the
bucket's public URL when one is configured and from local static assets
otherwise.
"""

from typing import Optional

from ..models.config import Config


class MediaResolver:
    """Resolves playback and download URLs for beat audio files."""

    def __init__(
        self,
        public_url: Optional[str] = None,
        audio_prefix: str = "audio",
        local_audio_path: str = "./assets/audio",
    ):
        self.public_url = public_url.rstrip("/") if public_url else None
        self.audio_prefix = audio_prefix.strip("/")
        self.local_audio_path = local_audio_path.rstrip("/")

    @classmethod
    def from_config(cls, config: Config) -> "MediaResolver":
        return cls(
            public_url=config.remote.public_url,
            audio_prefix=config.remote.audio_prefix,
            local_audio_path=config.catalog.local_audio_path,
        )

    @staticmethod
    def is_absolute(audio_file: str) -> bool:
        return audio_file.startswith(("http://", "https://"))

    def resolve(self, audio_file: str) -> str:
        """Playable URL for an audio file."""
        if self.is_absolute(audio_file):
            return audio_file

        filename = audio_file.lstrip("/")
        if self.public_url:
            if self.audio_prefix:
                return f"{self.public_url}/{self.audio_prefix}/{filename}"
            return f"{self.public_url}/{filename}"

        return f"{self.local_audio_path}/{filename}"

    def alternate_url(self, audio_file: str) -> Optional[str]:
        """WAV sibling of an MP3, offered to players as a second source."""
        if not audio_file.lower().endswith(".mp3"):
            return None
        return self.resolve(audio_file[:-4] + ".wav")

    def download_url(self, audio_file: str) -> str:
        return self.resolve(audio_file)

    @staticmethod
    def download_filename(title: str) -> str:
        """Suggested filename for a downloaded beat."""
        name = title.strip().replace("/", "-").replace("\\", "-") or "beat"
        return f"{name}.mp3"
