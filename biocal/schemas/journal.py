"""Pydantic schemas for garden journal entries and the data export document."""

from __future__ import annotations

import datetime as dt

from pydantic import BaseModel, Field

from biocal.models.enums import ObservationType
from biocal.schemas.profile import UserProfile


class Observation(BaseModel):
	type: ObservationType
	value: str | bool


class JournalEntry(BaseModel):
	id: str = Field(min_length=1, max_length=100)
	date: dt.date
	note: str = Field(default="", max_length=5000)
	observations: list[Observation] = Field(default_factory=list)
	created_at: dt.datetime
	updated_at: dt.datetime


class JournalEntryWrite(BaseModel):
	date: dt.date
	note: str = Field(default="", max_length=5000)
	observations: list[Observation] = Field(default_factory=list)
	id: str | None = Field(default=None, min_length=1, max_length=100)


class JournalListRead(BaseModel):
	items: list[JournalEntry]


class ExportDocument(BaseModel):
	profile: UserProfile | None = None
	journal: list[JournalEntry] = Field(default_factory=list)
	exported_at: dt.datetime


class ImportDocument(BaseModel):
	"""Accepted import payload; ``exported_at`` is informational and optional."""

	profile: UserProfile | None = None
	journal: list[JournalEntry] = Field(default_factory=list)
	exported_at: dt.datetime | None = None


class ImportResult(BaseModel):
	imported: bool
	profile: bool
	journal_entries: int
