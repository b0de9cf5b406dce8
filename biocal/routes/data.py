"""Export / import of all stored gardener data as one JSON document."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from biocal.dependencies import get_now, get_storage
from biocal.schemas.journal import ImportResult
from biocal.services.storage_service import StorageService

router = APIRouter(prefix="/data", tags=["data"])


@router.get("/export")
async def export_data(
	storage: StorageService = Depends(get_storage),
	now: datetime = Depends(get_now),
) -> Response:
	document = await storage.export_data(now)
	filename = f"bio-calendar-export-{now.date().isoformat()}.json"
	return Response(
		content=document,
		media_type="application/json",
		headers={"content-disposition": f'attachment; filename="{filename}"'},
	)


@router.post("/import", response_model=ImportResult)
async def import_data(request: Request, storage: StorageService = Depends(get_storage)) -> ImportResult:
	result = await storage.import_report(await request.body())
	if not result.imported:
		raise HTTPException(
			status_code=status.HTTP_400_BAD_REQUEST,
			detail="Import rejected; check the file format",
		)
	return result
