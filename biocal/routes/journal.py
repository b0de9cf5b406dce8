"""Garden journal routes."""

from __future__ import annotations

from datetime import date, datetime

from fastapi import APIRouter, Depends, HTTPException, status

from biocal.dependencies import get_now, get_storage
from biocal.schemas.journal import JournalEntry, JournalEntryWrite, JournalListRead
from biocal.services.storage_service import StorageService

router = APIRouter(prefix="/journal", tags=["journal"])


@router.get("", response_model=JournalListRead)
async def list_entries(storage: StorageService = Depends(get_storage)) -> JournalListRead:
	entries = await storage.load_all_journal_entries()
	entries.sort(key=lambda entry: entry.date, reverse=True)
	return JournalListRead(items=entries)


@router.get("/{day}", response_model=JournalEntry)
async def get_entry(day: date, storage: StorageService = Depends(get_storage)) -> JournalEntry:
	entry = await storage.load_journal_entry(day)
	if entry is None:
		raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No journal entry for {day}")
	return entry


@router.put("", response_model=JournalEntry)
async def save_entry(
	payload: JournalEntryWrite,
	storage: StorageService = Depends(get_storage),
	now: datetime = Depends(get_now),
) -> JournalEntry:
	entry_id = payload.id or f"{payload.date.isoformat()}-{int(now.timestamp() * 1000)}"
	created_at = now
	if payload.id is not None:
		for existing in await storage.load_all_journal_entries():
			if existing.id == payload.id:
				created_at = existing.created_at
				break

	entry = JournalEntry(
		id=entry_id,
		date=payload.date,
		note=payload.note,
		observations=payload.observations,
		created_at=created_at,
		updated_at=now,
	)
	if not await storage.save_journal_entry(entry):
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			detail="Journal storage unavailable",
		)
	return entry
