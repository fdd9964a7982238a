"""Configuration model for beat catalog."""

from pathlib import Path
from typing import Optional
import json
from dataclasses import dataclass, field

from ..exceptions import ConfigurationError


@dataclass
class RemoteConfig:
    """Configuration for the object-storage bucket that hosts beats."""
    endpoint: str = ""
    bucket_name: str = "beats"
    public_url: Optional[str] = None  # unset: remote metadata skipped, audio served locally
    metadata_file: str = "beats-metadata.json"
    audio_prefix: str = "audio"
    timeout: float = 10.0

    @property
    def metadata_url(self) -> Optional[str]:
        if not self.public_url:
            return None
        return f"{self.public_url.rstrip('/')}/{self.metadata_file}"


@dataclass
class CatalogConfig:
    """Configuration for browsing the catalog."""
    page_size: int = 12
    search_debounce_seconds: float = 0.3
    search_resets_page: bool = True
    local_data_path: Path = Path("data/beats.json")
    local_audio_path: str = "./assets/audio"


@dataclass
class Config:
    """Main configuration model."""
    remote: RemoteConfig = field(default_factory=RemoteConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    enable_analytics: bool = True
    notification_seconds: float = 3.0

    @classmethod
    def default(cls) -> "Config":
        """Create a default configuration."""
        return cls()

    def validate(self) -> None:
        """Reject values the session cannot work with.

        Raises:
            ConfigurationError: If a value is out of range.
        """
        if self.catalog.page_size < 1:
            raise ConfigurationError(f"page_size must be at least 1, got {self.catalog.page_size}")
        if self.catalog.search_debounce_seconds < 0:
            raise ConfigurationError("search_debounce_seconds cannot be negative")
        if self.notification_seconds < 0:
            raise ConfigurationError("notification_seconds cannot be negative")
        if self.remote.timeout <= 0:
            raise ConfigurationError("remote timeout must be positive")


def _dataclass_to_dict(obj):
    """Convert dataclass to dict recursively."""
    from dataclasses import is_dataclass, asdict
    if is_dataclass(obj):
        result = {}
        for key, value in asdict(obj).items():
            result[key] = _dataclass_to_dict(value)
        return result
    elif isinstance(obj, Path):
        return str(obj)
    elif isinstance(obj, dict):
        return {key: _dataclass_to_dict(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_dataclass_to_dict(item) for item in obj]
    else:
        return obj


def _dict_to_dataclass(data, dataclass_type):
    """Convert dict to dataclass recursively."""
    from dataclasses import is_dataclass, fields
    if not is_dataclass(dataclass_type):
        return data
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected an object for {dataclass_type.__name__}, got {type(data).__name__}"
        )

    # Get field types
    field_types = {f.name: f.type for f in fields(dataclass_type)}

    unknown = set(data) - set(field_types)
    if unknown:
        raise ConfigurationError(
            f"Unknown {dataclass_type.__name__} option(s): {', '.join(sorted(unknown))}"
        )

    kwargs = {}
    for field_name, field_type in field_types.items():
        if field_name in data:
            if hasattr(field_type, '__dataclass_fields__'):
                # It's a dataclass
                kwargs[field_name] = _dict_to_dataclass(data[field_name], field_type)
            elif field_type is Path:
                kwargs[field_name] = Path(data[field_name])
            else:
                kwargs[field_name] = data[field_name]

    return dataclass_type(**kwargs)


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file.

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid values.
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read config {config_path}: {e}") from e

    config = _dict_to_dataclass(config_data, Config)
    config.validate()
    return config


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    config_dict = _dataclass_to_dict(config)

    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config_dict, f, indent=2)
