"""Key-value persistence port for the profile, journal and data export.

The service sits on any async store exposing ``get``/``set``/``delete``.
``redis.asyncio.Redis`` (with ``decode_responses=True``) qualifies, and so does
the in-process ``MemoryKeyValueStore``. Nothing raises past this boundary:
missing keys, corrupt JSON and backend failures are logged and reported as
"no data" (``None``, ``[]`` or ``False``). Journal writes are read-modify-write,
so they refuse to run (and return ``False``) when the stored journal cannot
be read intact.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol

import structlog
from pydantic import TypeAdapter, ValidationError
from redis.exceptions import RedisError

from biocal.schemas.journal import ExportDocument, ImportDocument, ImportResult, JournalEntry
from biocal.schemas.profile import UserProfile

_logger = structlog.get_logger("biocal.storage")

_JOURNAL_ADAPTER = TypeAdapter(list[JournalEntry])
_BACKEND_ERRORS = (RedisError, OSError)


class KeyValueStore(Protocol):
	async def get(self, key: str) -> str | None: ...

	async def set(self, key: str, value: str) -> object: ...

	async def delete(self, *keys: str) -> object: ...


class MemoryKeyValueStore:
	"""Process-local store; state lives as long as the instance."""

	def __init__(self) -> None:
		self._data: dict[str, str] = {}

	async def get(self, key: str) -> str | None:
		return self._data.get(key)

	async def set(self, key: str, value: str) -> bool:
		self._data[key] = value
		return True

	async def delete(self, *keys: str) -> int:
		removed = 0
		for key in keys:
			if self._data.pop(key, None) is not None:
				removed += 1
		return removed


class StorageService:
	def __init__(self, store: KeyValueStore, key_prefix: str = "bio-calendar"):
		self.store = store
		self.profile_key = f"{key_prefix}-profile"
		self.journal_key = f"{key_prefix}-journal"
		self.settings_key = f"{key_prefix}-settings"

	# ── Profile ─────────────────────────────────────────────────────────────

	async def save_profile(self, profile: UserProfile) -> bool:
		return await self._write(self.profile_key, profile.model_dump_json(), "profile")

	async def load_profile(self) -> UserProfile | None:
		raw = await self._read(self.profile_key, "profile")
		if not raw:
			return None
		try:
			return UserProfile.model_validate_json(raw)
		except ValidationError as exc:
			_logger.warning("storage_decode_failed", record="profile", error=str(exc))
			return None

	async def has_profile(self) -> bool:
		return await self.load_profile() is not None

	# ── Journal ─────────────────────────────────────────────────────────────

	async def save_journal_entry(self, entry: JournalEntry) -> bool:
		existing = await self._load_journal_for_update()
		if existing is None:
			return False
		return await self._write_journal(_upsert(existing, [entry]))

	async def load_all_journal_entries(self) -> list[JournalEntry]:
		raw = await self._read(self.journal_key, "journal")
		if not raw:
			return []
		try:
			return _JOURNAL_ADAPTER.validate_json(raw)
		except ValidationError as exc:
			_logger.warning("storage_decode_failed", record="journal", error=str(exc))
			return []

	async def load_journal_entry(self, day: date) -> JournalEntry | None:
		for entry in await self.load_all_journal_entries():
			if entry.date == day:
				return entry
		return None

	# ── Bulk operations ─────────────────────────────────────────────────────

	async def clear_all(self) -> bool:
		try:
			await self.store.delete(self.profile_key, self.journal_key, self.settings_key)
		except _BACKEND_ERRORS as exc:
			_logger.error("storage_clear_failed", error=str(exc))
			return False
		return True

	async def export_data(self, now: datetime) -> str:
		document = ExportDocument(
			profile=await self.load_profile(),
			journal=await self.load_all_journal_entries(),
			exported_at=now,
		)
		return document.model_dump_json(indent=2)

	async def import_data(self, payload: str | bytes) -> bool:
		return (await self.import_report(payload)).imported

	async def import_report(self, payload: str | bytes) -> ImportResult:
		"""Validate the whole document first; only a valid document is written."""
		try:
			document = ImportDocument.model_validate_json(payload)
		except ValidationError as exc:
			_logger.warning("storage_import_rejected", error_count=exc.error_count())
			return ImportResult(imported=False, profile=False, journal_entries=0)

		existing: list[JournalEntry] = []
		if document.journal:
			loaded = await self._load_journal_for_update()
			if loaded is None:
				return ImportResult(imported=False, profile=False, journal_entries=0)
			existing = loaded

		if document.profile is not None:
			if not await self.save_profile(document.profile):
				return ImportResult(imported=False, profile=False, journal_entries=0)

		if document.journal:
			entries = _upsert(existing, document.journal)
			if not await self._write_journal(entries):
				return ImportResult(
					imported=False,
					profile=document.profile is not None,
					journal_entries=0,
				)

		_logger.info(
			"storage_import_completed",
			profile=document.profile is not None,
			journal_entries=len(document.journal),
		)
		return ImportResult(
			imported=True,
			profile=document.profile is not None,
			journal_entries=len(document.journal),
		)

	# ── Internals ───────────────────────────────────────────────────────────

	async def _write_journal(self, entries: list[JournalEntry]) -> bool:
		raw = _JOURNAL_ADAPTER.dump_json(entries).decode("utf-8")
		return await self._write(self.journal_key, raw, "journal")

	async def _load_journal_for_update(self) -> list[JournalEntry] | None:
		"""Stored journal for a read-modify-write; ``None`` if it cannot be read intact.

		A missing key is an empty journal. A backend error or an undecodable
		document is not, and writing over either would drop stored entries.
		"""
		try:
			raw = await self._get(self.journal_key)
		except _BACKEND_ERRORS as exc:
			_logger.error("storage_load_failed", record="journal", error=str(exc), for_update=True)
			return None
		if not raw:
			return []
		try:
			return _JOURNAL_ADAPTER.validate_json(raw)
		except ValidationError as exc:
			_logger.error("storage_decode_failed", record="journal", error=str(exc), for_update=True)
			return None

	async def _get(self, key: str) -> str | None:
		raw = await self.store.get(key)
		if isinstance(raw, bytes):
			return raw.decode("utf-8", errors="replace")
		return raw

	async def _read(self, key: str, record: str) -> str | None:
		try:
			return await self._get(key)
		except _BACKEND_ERRORS as exc:
			_logger.error("storage_load_failed", record=record, error=str(exc))
			return None

	async def _write(self, key: str, value: str, record: str) -> bool:
		try:
			await self.store.set(key, value)
		except _BACKEND_ERRORS as exc:
			_logger.error("storage_save_failed", record=record, error=str(exc))
			return False
		return True


def _upsert(existing: list[JournalEntry], incoming: list[JournalEntry]) -> list[JournalEntry]:
	merged = list(existing)
	positions = {entry.id: index for index, entry in enumerate(merged)}
	for entry in incoming:
		index = positions.get(entry.id)
		if index is None:
			positions[entry.id] = len(merged)
			merged.append(entry)
		else:
			merged[index] = entry
	return merged
