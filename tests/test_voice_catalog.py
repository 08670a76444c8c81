from cea_chat.models import VoiceDescriptor
from cea_chat.voice.catalog import VoiceCatalog


class ChangingSource:
    def __init__(self, *batches: list[VoiceDescriptor]) -> None:
        self.batches = list(batches)
        self.calls = 0

    def __call__(self) -> list[VoiceDescriptor]:
        batch = self.batches[min(self.calls, len(self.batches) - 1)]
        self.calls += 1
        return batch


def test_catalog_is_loaded_lazily_on_first_read() -> None:
    source = ChangingSource([VoiceDescriptor(name="Samantha", lang="en-US")])
    catalog = VoiceCatalog(source)

    assert source.calls == 0
    assert [voice.name for voice in catalog.voices] == ["Samantha"]
    assert [voice.name for voice in catalog.voices] == ["Samantha"]
    assert source.calls == 1


def test_refresh_keeps_cache_when_platform_reports_nothing() -> None:
    source = ChangingSource([VoiceDescriptor(name="Karen", lang="en-AU")], [])
    catalog = VoiceCatalog(source)

    catalog.voices_changed()
    catalog.voices_changed()

    assert [voice.name for voice in catalog.voices] == ["Karen"]


def test_voice_change_notification_replaces_cache_wholesale() -> None:
    source = ChangingSource(
        [VoiceDescriptor(name="Karen", lang="en-AU"), VoiceDescriptor(name="Fred", lang="en-US")],
        [VoiceDescriptor(name="Amelie", lang="fr-CA")],
    )
    catalog = VoiceCatalog(source)

    catalog.voices_changed()
    catalog.voices_changed()

    assert [voice.name for voice in catalog.voices] == ["Amelie"]


def test_failing_engine_reads_as_empty_catalog(caplog) -> None:
    def broken() -> list[VoiceDescriptor]:
        raise RuntimeError("driver not loaded")

    catalog = VoiceCatalog(broken)

    assert catalog.voices == []
    assert "voice_catalog_query_failed" in caplog.messages
