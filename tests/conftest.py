"""Shared pytest fixtures — in-memory storage, async API client, sample profiles."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from biocal.dependencies import get_now, get_storage, get_today
from biocal.main import app
from biocal.schemas.profile import UserProfile
from biocal.services.storage_service import MemoryKeyValueStore, StorageService

FIXED_TODAY = date(2024, 1, 1)
FIXED_NOW = datetime(2024, 1, 1, 9, 30, tzinfo=UTC)


class FailingStore:
	"""Store whose every call fails like an unreachable Redis."""

	async def get(self, key: str) -> str | None:
		raise ConnectionError("store offline")

	async def set(self, key: str, value: str) -> bool:
		raise ConnectionError("store offline")

	async def delete(self, *keys: str) -> int:
		raise ConnectionError("store offline")


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
	return MemoryKeyValueStore()


@pytest.fixture
def storage(memory_store: MemoryKeyValueStore) -> StorageService:
	return StorageService(memory_store, "test-calendar")


@pytest.fixture
def us_profile() -> UserProfile:
	return UserProfile(country="US")


@pytest.fixture
def full_profile() -> UserProfile:
	return UserProfile(
		country="US",
		state="OR",
		city="Portland",
		latitude=45.5,
		longitude=-122.6,
		hardiness_zone="8b",
		avg_summer_high=82,
		growing_space=["Raised Beds", "Containers"],
		sun_exposure="Full Sun",
		soil_type="Loam",
		water_access=["Irrigation"],
		time_available="30 min/day",
		goals=["Vegetables", "Herbs"],
		experience_level="Beginner",
		top_crops=["Tomato", "Kale"],
		constraints=["Slugs"],
	)


@pytest.fixture
async def client(storage: StorageService) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and storage/clock dependencies pinned."""

	app.dependency_overrides[get_storage] = lambda: storage
	app.dependency_overrides[get_today] = lambda: FIXED_TODAY
	app.dependency_overrides[get_now] = lambda: FIXED_NOW
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()


@pytest.fixture
def failing_storage() -> StorageService:
	return StorageService(FailingStore(), "down")
