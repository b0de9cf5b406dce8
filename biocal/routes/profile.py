"""Gardener profile routes."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status

from biocal.dependencies import get_now, get_storage
from biocal.schemas.profile import UserProfile
from biocal.services.storage_service import StorageService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserProfile)
async def get_profile(storage: StorageService = Depends(get_storage)) -> UserProfile:
	profile = await storage.load_profile()
	if profile is None:
		raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No profile saved")
	return profile


@router.put("", response_model=UserProfile)
async def save_profile(
	payload: UserProfile,
	storage: StorageService = Depends(get_storage),
	now: datetime = Depends(get_now),
) -> UserProfile:
	existing = await storage.load_profile()
	created_at = payload.created_at or (existing.created_at if existing else None) or now
	profile = payload.model_copy(update={"created_at": created_at, "updated_at": now})
	if not await storage.save_profile(profile):
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			detail="Profile storage unavailable",
		)
	return profile


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_data(storage: StorageService = Depends(get_storage)) -> None:
	if not await storage.clear_all():
		raise HTTPException(
			status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
			detail="Profile storage unavailable",
		)
