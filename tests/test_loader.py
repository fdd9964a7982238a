"""Tests for catalog sources and the prioritized loader."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from beat_catalog.domain.catalog.store import CatalogStore
from beat_catalog.domain.result import (
    MalformedPayloadError,
    NoDataLoadedError,
    SourceUnavailableError,
    failure,
    success,
)
from beat_catalog.infrastructure.loader import CatalogLoader
from beat_catalog.infrastructure.sources import (
    CatalogSource,
    LocalFileSource,
    RemoteMetadataSource,
    SAMPLE_BEATS,
    SampleSource,
    normalize_payload,
)
from beat_catalog.models.config import Config


class StubSource(CatalogSource):
    """Source returning a fixed result and counting fetches."""

    def __init__(self, name, result=None, exc=None):
        self.name = name
        self.result = result
        self.exc = exc
        self.fetches = 0

    async def fetch(self):
        self.fetches += 1
        if self.exc is not None:
            raise self.exc
        return self.result


class FakeResponse:
    def __init__(self, status=200, payload=None, json_error=None):
        self.status = status
        self._payload = payload
        self._json_error = json_error

    async def json(self, content_type="application/json"):
        if self._json_error is not None:
            raise self._json_error
        return self._payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []

    def get(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.response


def record(beat_id, genre="trap"):
    return {
        "id": beat_id,
        "title": f"Beat {beat_id}",
        "genre": genre,
        "bpm": 120,
        "key": "C Minor",
        "audioFile": f"beat-{beat_id}.mp3",
    }


class TestNormalizePayload:
    """Test accepted payload shapes."""

    def test_bare_list(self):
        beats = normalize_payload([record(1), record(2)])
        assert [b.id for b in beats] == ["1", "2"]

    @pytest.mark.parametrize("field", ["beats", "items"])
    def test_wrapped_list(self, field):
        beats = normalize_payload({field: [record(1)], "version": 2})
        assert [b.id for b in beats] == ["1"]

    def test_empty_list_is_a_valid_catalog(self):
        assert normalize_payload([]) == []

    def test_object_without_known_field(self):
        with pytest.raises(MalformedPayloadError):
            normalize_payload({"tracks": []}, source="remote")

    def test_wrapped_value_must_be_list(self):
        with pytest.raises(MalformedPayloadError):
            normalize_payload({"beats": {"1": record(1)}})

    def test_scalar_payload(self):
        with pytest.raises(MalformedPayloadError):
            normalize_payload("beats")


class TestLocalFileSource:
    """Test the bundled file source."""

    @pytest.mark.asyncio
    async def test_reads_json(self, tmp_path):
        path = tmp_path / "beats.json"
        path.write_text(json.dumps({"beats": [record(1)]}), encoding="utf-8")
        result = await LocalFileSource(path).fetch()
        assert result.value() == {"beats": [record(1)]}

    @pytest.mark.asyncio
    async def test_missing_file_is_unavailable(self, tmp_path):
        result = await LocalFileSource(tmp_path / "nope.json").fetch()
        assert isinstance(result.error(), SourceUnavailableError)
        assert result.error().source == "local"

    @pytest.mark.asyncio
    async def test_invalid_json_is_malformed(self, tmp_path):
        path = tmp_path / "beats.json"
        path.write_text("{not json", encoding="utf-8")
        result = await LocalFileSource(path).fetch()
        assert isinstance(result.error(), MalformedPayloadError)


class TestRemoteMetadataSource:
    """Test the bucket metadata source with a fake aiohttp session."""

    @pytest.mark.asyncio
    async def test_fetches_metadata(self):
        session = FakeSession(FakeResponse(payload=[record(1)]))
        source = RemoteMetadataSource("https://beats.example.com/beats-metadata.json", session=session)

        result = await source.fetch()

        assert result.value() == [record(1)]
        assert session.urls == ["https://beats.example.com/beats-metadata.json"]

    @pytest.mark.asyncio
    async def test_non_200_is_unavailable(self):
        source = RemoteMetadataSource("https://x/beats-metadata.json", session=FakeSession(FakeResponse(status=404)))
        result = await source.fetch()
        assert isinstance(result.error(), SourceUnavailableError)
        assert "404" in str(result.error())

    @pytest.mark.asyncio
    async def test_bad_json_is_malformed(self):
        response = FakeResponse(json_error=json.JSONDecodeError("bad", "doc", 0))
        source = RemoteMetadataSource("https://x/beats-metadata.json", session=FakeSession(response))
        result = await source.fetch()
        assert isinstance(result.error(), MalformedPayloadError)

    @pytest.mark.asyncio
    async def test_client_error_is_unavailable(self):
        session = FakeSession(error=aiohttp.ClientConnectionError("refused"))
        source = RemoteMetadataSource("https://x/beats-metadata.json", session=session)
        result = await source.fetch()
        assert isinstance(result.error(), SourceUnavailableError)

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        session = FakeSession(error=asyncio.TimeoutError())
        source = RemoteMetadataSource("https://x/beats-metadata.json", session=session)
        result = await source.fetch()
        assert isinstance(result.error(), SourceUnavailableError)

    @pytest.mark.asyncio
    async def test_unconfigured_url_is_unavailable(self):
        result = await RemoteMetadataSource(None).fetch()
        assert isinstance(result.error(), SourceUnavailableError)

    def test_from_config_builds_metadata_url(self):
        config = Config.default()
        config.remote.public_url = "https://beats.example.com/"
        source = RemoteMetadataSource.from_config(config.remote)
        assert source.url == "https://beats.example.com/beats-metadata.json"
        assert source.timeout == 10.0


class TestSampleSource:
    """Test the built-in fallback data."""

    @pytest.mark.asyncio
    async def test_serves_six_sample_beats(self):
        payload = (await SampleSource().fetch()).value()
        beats = normalize_payload(payload)
        assert len(beats) == 6
        assert [b.genre for b in beats] == ["trap", "r&b", "hip-hop", "drill", "trap", "hip-hop"]

    @pytest.mark.asyncio
    async def test_returns_copies(self):
        source = SampleSource()
        payload = (await source.fetch()).value()
        payload[0]["title"] = "changed"
        assert SAMPLE_BEATS[0]["title"] == "Midnight Vibes"


class TestCatalogLoader:
    """Test source priority and fallthrough."""

    @pytest.mark.asyncio
    async def test_first_source_wins(self):
        local = StubSource("local", success([record(1)]))
        remote = StubSource("remote", success([record(2)]))
        loader = CatalogLoader([local, remote])

        result = await loader.load()

        assert [b.id for b in result.value()] == ["1"]
        assert remote.fetches == 0
        assert loader.last_source == "local"

    @pytest.mark.asyncio
    async def test_falls_through_to_second_source(self):
        local = StubSource("local", failure(SourceUnavailableError("missing", source="local")))
        remote = StubSource("remote", success({"beats": [record(7), record(8)]}))
        fallback = StubSource("sample", success([record(99)]))
        loader = CatalogLoader([local, remote, fallback])

        result = await loader.load()

        assert result.value() == normalize_payload({"beats": [record(7), record(8)]})
        assert fallback.fetches == 0
        assert loader.last_source == "remote"

    @pytest.mark.asyncio
    async def test_raising_source_falls_through(self):
        local = StubSource("local", exc=OSError("disk on fire"))
        remote = StubSource("remote", success([record(2)]))
        result = await CatalogLoader([local, remote]).load()
        assert [b.id for b in result.value()] == ["2"]

    @pytest.mark.asyncio
    async def test_malformed_payload_falls_through(self):
        local = StubSource("local", success({"tracks": []}))
        remote = StubSource("remote", success([record(1), record(1)]))
        sample = SampleSource()
        loader = CatalogLoader([local, remote, sample])

        result = await loader.load()

        assert len(result.value()) == 6
        assert loader.last_source == "sample"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field,raw", [
        ("bpm", "Infinity"),
        ("bpm", "1e400"),
        ("bpm", "140.7"),
        ("duration", "Infinity"),
        ("duration", "NaN"),
    ])
    async def test_invalid_numbers_fall_through(self, tmp_path, field, raw):
        # Later keys win, so the appended field overrides the valid one.
        text = json.dumps([record(1)])[:-2] + f', "{field}": {raw}}}]'
        path = tmp_path / "beats.json"
        path.write_text(text, encoding="utf-8")
        loader = CatalogLoader([LocalFileSource(path), SampleSource()])

        result = await loader.load()

        assert loader.last_source == "sample"
        assert len(result.value()) == 6

    @pytest.mark.asyncio
    async def test_infinite_remote_bpm_falls_through(self):
        payload = [dict(record(1), bpm=float("inf"))]
        remote = RemoteMetadataSource(
            "https://x/beats-metadata.json", session=FakeSession(FakeResponse(payload=payload))
        )
        loader = CatalogLoader([remote, SampleSource()])

        result = await loader.load()

        assert loader.last_source == "sample"
        assert isinstance(result.value()[0].bpm, int)

    @pytest.mark.asyncio
    async def test_all_sources_fail(self):
        sources = [
            StubSource("local", failure(SourceUnavailableError("missing", source="local"))),
            StubSource("remote", failure(SourceUnavailableError("HTTP 500", source="remote"))),
            StubSource("sample", success("garbage")),
        ]
        loader = CatalogLoader(sources)

        result = await loader.load()

        assert result.is_failure()
        error = result.error()
        assert isinstance(error, NoDataLoadedError)
        assert list(error.attempts) == ["local", "remote", "sample"]
        assert isinstance(error.attempts["sample"], MalformedPayloadError)
        assert loader.last_source is None

    @pytest.mark.asyncio
    async def test_load_into_replaces_store(self):
        store = CatalogStore()
        store.replace_all(normalize_payload([record(1)]))
        loader = CatalogLoader([StubSource("local", success([record(2), record(3)]))])

        await loader.load_into(store)

        assert [b.id for b in store.all_items] == ["2", "3"]

    @pytest.mark.asyncio
    async def test_failed_load_leaves_store_alone(self):
        store = CatalogStore()
        store.replace_all(normalize_payload([record(1)]))
        loader = CatalogLoader([StubSource("local", failure(SourceUnavailableError("x")))])

        result = await loader.load_into(store)

        assert result.is_failure()
        assert [b.id for b in store.all_items] == ["1"]

    @pytest.mark.asyncio
    async def test_from_config_order(self, tmp_path):
        config = Config.default()
        config.catalog.local_data_path = tmp_path / "missing.json"
        loader = CatalogLoader.from_config(config)

        assert [s.name for s in loader.sources] == ["local", "remote", "sample"]
        result = await loader.load()
        assert loader.last_source == "sample"
        assert len(result.value()) == 6

    @pytest.mark.asyncio
    async def test_from_config_uses_session_for_remote(self, tmp_path):
        config = Config.default()
        config.catalog.local_data_path = tmp_path / "missing.json"
        config.remote.public_url = "https://beats.example.com"
        session = FakeSession(FakeResponse(payload={"items": [record(42)]}))

        loader = CatalogLoader.from_config(config, session=session)
        result = await loader.load()

        assert [b.id for b in result.value()] == ["42"]
        assert loader.last_source == "remote"

    def test_requires_sources(self):
        with pytest.raises(ValueError):
            CatalogLoader([])


class TestRemoteWithoutInjectedSession:
    """The source opens its own aiohttp session when none is injected."""

    @pytest.mark.asyncio
    async def test_opens_client_session(self, monkeypatch):
        response = FakeResponse(payload=[record(5)])
        inner = FakeSession(response)
        client_session = MagicMock()
        client_session.__aenter__ = AsyncMock(return_value=inner)
        client_session.__aexit__ = AsyncMock(return_value=False)
        factory = MagicMock(return_value=client_session)
        monkeypatch.setattr(aiohttp, "ClientSession", factory)

        result = await RemoteMetadataSource("https://x/beats-metadata.json", timeout=5).fetch()

        assert result.value() == [record(5)]
        factory.assert_called_once()
        assert factory.call_args.kwargs["timeout"].total == 5
