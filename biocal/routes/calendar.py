"""Biodynamic calendar routes."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status

from biocal.config import get_settings
from biocal.dependencies import get_storage, get_today
from biocal.models.enums import BiodynamicDayType, MoonPhase, SeasonalMode
from biocal.schemas.calendar import (
	CalendarDay,
	CalendarGuideRead,
	CalendarPreviewRequest,
	CalendarRead,
	DayTypeGuide,
	MoonPhaseGuide,
	SeasonalModeGuide,
)
from biocal.schemas.profile import UserProfile
from biocal.services import biodynamic, calendar_engine, moon_phase, season_inference
from biocal.services.calendar_engine import CalendarConfig
from biocal.services.storage_service import StorageService

router = APIRouter(prefix="/calendar", tags=["calendar"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, (ValueError, OverflowError)):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(
		status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
		detail="Unexpected calendar failure",
	)


async def _require_profile(storage: StorageService) -> UserProfile:
	profile = await storage.load_profile()
	if profile is None:
		raise LookupError("No profile saved; complete onboarding first")
	return profile


def _check_range(start: date, count: int) -> None:
	if (date.max - start).days < count - 1:
		raise ValueError(f"A {count}-day range from {start} runs past {date.max}")


def _config(start: date, days: int | None, educational: bool) -> CalendarConfig:
	settings = get_settings()
	count = days if days is not None else settings.calendar_default_days
	if count > settings.calendar_max_days:
		raise ValueError(f"days must not exceed {settings.calendar_max_days}")
	_check_range(start, count)
	return CalendarConfig(days_to_generate=count, include_educational_content=educational)


@router.get("", response_model=CalendarRead)
async def get_calendar(
	start: date | None = None,
	days: int | None = Query(default=None, ge=1),
	educational: bool = False,
	storage: StorageService = Depends(get_storage),
	today: date = Depends(get_today),
) -> CalendarRead:
	start = start or today
	try:
		profile = await _require_profile(storage)
		calendar = calendar_engine.generate_calendar(profile, start, _config(start, days, educational))
	except Exception as exc:
		raise _map_error(exc) from exc
	return CalendarRead(start=start, days=calendar)


@router.post("/preview", response_model=CalendarRead)
async def preview_calendar(
	payload: CalendarPreviewRequest,
	today: date = Depends(get_today),
) -> CalendarRead:
	start = payload.start or today
	try:
		config = _config(start, payload.days, payload.include_educational_content)
		calendar = calendar_engine.generate_calendar(payload.profile, start, config)
	except Exception as exc:
		raise _map_error(exc) from exc
	return CalendarRead(start=start, days=calendar)


@router.get("/today", response_model=CalendarDay)
async def get_today_entry(
	storage: StorageService = Depends(get_storage),
	today: date = Depends(get_today),
) -> CalendarDay:
	try:
		profile = await _require_profile(storage)
		return calendar_engine.get_today(profile, today)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/week", response_model=CalendarRead)
async def get_week(
	storage: StorageService = Depends(get_storage),
	today: date = Depends(get_today),
) -> CalendarRead:
	try:
		profile = await _require_profile(storage)
		_check_range(today, calendar_engine.WEEK_DAYS)
		week = calendar_engine.get_week(profile, today)
	except Exception as exc:
		raise _map_error(exc) from exc
	return CalendarRead(start=today, days=week)


@router.get("/filter/{day_type}", response_model=CalendarRead)
async def filter_calendar(
	day_type: BiodynamicDayType,
	start: date | None = None,
	days: int | None = Query(default=None, ge=1),
	storage: StorageService = Depends(get_storage),
	today: date = Depends(get_today),
) -> CalendarRead:
	start = start or today
	try:
		profile = await _require_profile(storage)
		calendar = calendar_engine.generate_calendar(profile, start, _config(start, days, False))
	except Exception as exc:
		raise _map_error(exc) from exc
	return CalendarRead(start=start, days=calendar_engine.filter_by_day_type(calendar, day_type))


@router.get("/next/{day_type}", response_model=CalendarDay)
async def next_day_type(
	day_type: BiodynamicDayType,
	start: date | None = None,
	storage: StorageService = Depends(get_storage),
	today: date = Depends(get_today),
) -> CalendarDay:
	start = start or today
	try:
		profile = await _require_profile(storage)
		found = calendar_engine.find_next_day_type(profile, day_type, start)
		if found is None:
			raise LookupError(
				f"No {day_type.value} day within {calendar_engine.NEXT_DAY_TYPE_SEARCH_DAYS} days of {start}"
			)
	except Exception as exc:
		raise _map_error(exc) from exc
	return found


@router.get("/guide", response_model=CalendarGuideRead)
async def get_guide() -> CalendarGuideRead:
	return CalendarGuideRead(
		day_types=[
			DayTypeGuide(
				day_type=day_type,
				element=biodynamic.day_type_element(day_type),
				description=biodynamic.day_type_description(day_type),
				recommended_crops=biodynamic.recommended_crops(day_type),
				best_activities=biodynamic.best_activities(day_type),
				avoid_activities=biodynamic.avoid_activities(day_type),
			)
			for day_type in BiodynamicDayType
		],
		moon_phases=[
			MoonPhaseGuide(
				phase=phase,
				emoji=moon_phase.moon_emoji(phase),
				advice=moon_phase.moon_planting_advice(phase),
				waxing=moon_phase.is_waxing(phase),
				waning=moon_phase.is_waning(phase),
			)
			for phase in MoonPhase
		],
		seasonal_modes=[
			SeasonalModeGuide(
				mode=mode,
				description=season_inference.seasonal_mode_description(mode),
				priorities=season_inference.seasonal_priorities(mode),
				good_for=[
					activity
					for activity in season_inference.GOOD_TIME_ACTIVITIES
					if season_inference.is_good_time_for(mode, activity)
				],
			)
			for mode in SeasonalMode
		],
	)
