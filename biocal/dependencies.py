"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

from datetime import UTC, date, datetime

from fastapi import Request

from biocal.config import get_settings
from biocal.services.storage_service import MemoryKeyValueStore, StorageService


def get_storage(request: Request) -> StorageService:
	store = getattr(request.app.state, "store", None)
	if store is None:
		store = MemoryKeyValueStore()
		request.app.state.store = store
	return StorageService(store, get_settings().storage_key_prefix)


def get_today() -> date:
	"""Clock boundary: the calendar core only ever receives explicit dates."""
	return date.today()


def get_now() -> datetime:
	return datetime.now(UTC)
