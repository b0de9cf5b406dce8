from __future__ import annotations

import json
from datetime import UTC, date, datetime

import pytest

from biocal.models.enums import ObservationType
from biocal.schemas.journal import JournalEntry, Observation
from biocal.schemas.profile import UserProfile
from biocal.services.storage_service import MemoryKeyValueStore, StorageService

STAMP = datetime(2024, 5, 1, 8, 0, tzinfo=UTC)


def _entry(entry_id: str, day: date, note: str = "") -> JournalEntry:
    return JournalEntry(
        id=entry_id,
        date=day,
        note=note,
        observations=[Observation(type=ObservationType.rainfall, value="5mm")],
        created_at=STAMP,
        updated_at=STAMP,
    )


@pytest.mark.asyncio
async def test_profile_round_trip(storage: StorageService, full_profile: UserProfile) -> None:
    assert await storage.load_profile() is None
    assert await storage.has_profile() is False

    assert await storage.save_profile(full_profile) is True
    assert await storage.load_profile() == full_profile
    assert await storage.has_profile() is True


@pytest.mark.asyncio
async def test_keys_use_configured_prefix(memory_store: MemoryKeyValueStore, us_profile: UserProfile) -> None:
    service = StorageService(memory_store, "bio-calendar")
    await service.save_profile(us_profile)
    assert json.loads(await memory_store.get("bio-calendar-profile"))["country"] == "US"


@pytest.mark.asyncio
async def test_corrupt_profile_reads_as_missing(memory_store: MemoryKeyValueStore, storage: StorageService) -> None:
    await memory_store.set(storage.profile_key, "{not json")
    assert await storage.load_profile() is None


@pytest.mark.asyncio
async def test_journal_upsert_replaces_by_id(storage: StorageService) -> None:
    await storage.save_journal_entry(_entry("a", date(2024, 5, 1), "first"))
    await storage.save_journal_entry(_entry("b", date(2024, 5, 2)))
    await storage.save_journal_entry(_entry("a", date(2024, 5, 1), "edited"))

    entries = await storage.load_all_journal_entries()
    assert [entry.id for entry in entries] == ["a", "b"]
    assert entries[0].note == "edited"


@pytest.mark.asyncio
async def test_load_journal_entry_by_date(storage: StorageService) -> None:
    await storage.save_journal_entry(_entry("a", date(2024, 5, 1)))
    found = await storage.load_journal_entry(date(2024, 5, 1))
    assert found is not None
    assert found.id == "a"
    assert await storage.load_journal_entry(date(2024, 5, 3)) is None


@pytest.mark.asyncio
async def test_corrupt_journal_reads_as_empty(memory_store: MemoryKeyValueStore, storage: StorageService) -> None:
    await memory_store.set(storage.journal_key, '[{"id": 1}]')
    assert await storage.load_all_journal_entries() == []


@pytest.mark.asyncio
async def test_clear_all_removes_everything(storage: StorageService, us_profile: UserProfile) -> None:
    await storage.save_profile(us_profile)
    await storage.save_journal_entry(_entry("a", date(2024, 5, 1)))

    assert await storage.clear_all() is True
    assert await storage.load_profile() is None
    assert await storage.load_all_journal_entries() == []


@pytest.mark.asyncio
async def test_export_then_import_into_fresh_store(storage: StorageService, full_profile: UserProfile) -> None:
    await storage.save_profile(full_profile)
    await storage.save_journal_entry(_entry("a", date(2024, 5, 1), "sowed peas"))

    exported = await storage.export_data(STAMP)
    document = json.loads(exported)
    assert document["profile"]["country"] == "US"
    assert document["journal"][0]["note"] == "sowed peas"
    assert document["exported_at"].startswith("2024-05-01T08:00:00")

    fresh = StorageService(MemoryKeyValueStore(), "fresh")
    assert await fresh.import_data(exported) is True
    assert await fresh.load_profile() == full_profile
    assert [entry.note for entry in await fresh.load_all_journal_entries()] == ["sowed peas"]


@pytest.mark.asyncio
async def test_export_of_empty_store(storage: StorageService) -> None:
    document = json.loads(await storage.export_data(STAMP))
    assert document["profile"] is None
    assert document["journal"] == []


@pytest.mark.asyncio
async def test_import_merges_journal_and_reports_counts(storage: StorageService) -> None:
    await storage.save_journal_entry(_entry("keep", date(2024, 4, 1)))
    payload = json.dumps(
        {"journal": [_entry("new", date(2024, 5, 1)).model_dump(mode="json")]}
    )

    result = await storage.import_report(payload)

    assert result.imported is True
    assert result.profile is False
    assert result.journal_entries == 1
    assert {entry.id for entry in await storage.load_all_journal_entries()} == {"keep", "new"}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        '{"profile": {"state": "OR"}}',
        '{"journal": [{"id": "x"}]}',
        "[]",
    ],
)
async def test_rejected_import_leaves_state_untouched(
    storage: StorageService,
    us_profile: UserProfile,
    payload: str,
) -> None:
    await storage.save_profile(us_profile)

    assert await storage.import_data(payload) is False
    assert await storage.load_profile() == us_profile
    assert await storage.load_all_journal_entries() == []


@pytest.mark.asyncio
async def test_backend_failures_are_reported_not_raised(
    failing_storage: StorageService,
    us_profile: UserProfile,
) -> None:
    service = failing_storage

    assert await service.save_profile(us_profile) is False
    assert await service.load_profile() is None
    assert await service.load_all_journal_entries() == []
    assert await service.save_journal_entry(_entry("a", date(2024, 5, 1))) is False
    assert await service.clear_all() is False
    assert await service.import_data('{"profile": {"country": "US"}}') is False


class FlakyStore(MemoryKeyValueStore):
    """Memory store whose next ``get`` fails once when armed."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_next_get = False

    async def get(self, key: str) -> str | None:
        if self.fail_next_get:
            self.fail_next_get = False
            raise ConnectionError("connection reset")
        return await super().get(key)


async def _seed_journal(service: StorageService) -> None:
    for index in range(3):
        await service.save_journal_entry(_entry(f"e{index}", date(2024, 5, index + 1)))


@pytest.mark.asyncio
async def test_failed_read_blocks_journal_save() -> None:
    store = FlakyStore()
    service = StorageService(store, "flaky")
    await _seed_journal(service)

    store.fail_next_get = True
    assert await service.save_journal_entry(_entry("new", date(2024, 6, 1))) is False

    assert [entry.id for entry in await service.load_all_journal_entries()] == ["e0", "e1", "e2"]


@pytest.mark.asyncio
async def test_failed_read_blocks_import_and_writes_nothing(full_profile: UserProfile) -> None:
    store = FlakyStore()
    service = StorageService(store, "flaky")
    await _seed_journal(service)
    payload = json.dumps(
        {
            "profile": full_profile.model_dump(mode="json"),
            "journal": [_entry("imp", date(2024, 6, 1)).model_dump(mode="json")],
        }
    )

    store.fail_next_get = True
    result = await service.import_report(payload)

    assert result.imported is False
    assert await service.load_profile() is None
    assert [entry.id for entry in await service.load_all_journal_entries()] == ["e0", "e1", "e2"]


@pytest.mark.asyncio
async def test_malformed_journal_is_not_overwritten(memory_store: MemoryKeyValueStore, storage: StorageService) -> None:
    good = _entry("keep", date(2024, 5, 1)).model_dump(mode="json")
    raw = json.dumps([good, {"id": "broken"}])
    await memory_store.set(storage.journal_key, raw)

    assert await storage.save_journal_entry(_entry("new", date(2024, 6, 1))) is False
    assert await storage.import_data(json.dumps({"journal": [good]})) is False
    assert await memory_store.get(storage.journal_key) == raw


@pytest.mark.asyncio
async def test_profile_only_import_ignores_unreadable_journal(storage: StorageService, memory_store: MemoryKeyValueStore) -> None:
    await memory_store.set(storage.journal_key, "{corrupt")

    assert await storage.import_data('{"profile": {"country": "SE"}}') is True
    profile = await storage.load_profile()
    assert profile is not None and profile.country == "SE"
