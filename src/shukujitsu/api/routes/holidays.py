from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Response, status

from shukujitsu.core.config import Settings, get_settings
from shukujitsu.core.errors import HolidayError
from shukujitsu.schemas.holiday import HolidayRead
from shukujitsu.services.export import OutputFormat, render_holidays
from shukujitsu.services.holidays import holiday

router = APIRouter()

YearPath = Annotated[int, Path(ge=1, le=9999)]


@router.get("", response_model=list[HolidayRead])
async def list_holidays(
    year: int | None = Query(default=None, ge=1, le=9999)
) -> list[HolidayRead]:
    target_year = year or date.today().year
    try:
        holidays = holiday(target_year)
    except HolidayError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    return [HolidayRead.from_holiday(item) for item in holidays]


@router.get("/{year}/export")
async def export_holidays(
    year: YearPath,
    settings: Annotated[Settings, Depends(get_settings)],
    output_format: str | None = Query(default=None, alias="format"),
) -> Response:
    selected = OutputFormat.parse(output_format or settings.default_format)
    body = render_holidays(year, selected)
    if body is None:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Holiday computation failed",
        )
    return Response(content=body, media_type=selected.media_type)
