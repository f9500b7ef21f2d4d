from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import PlainTextResponse

from backend.application import get_dashboard_service
from backend.core.dates import is_month_key, normalise_day
from backend.infrastructure import FeedError

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _validate_filters(month: str | None, day: str | None) -> tuple[str | None, str | None]:
    if month is not None and not is_month_key(month):
        raise HTTPException(status_code=400, detail="month must look like YYYY-MM")
    try:
        day_str = normalise_day(day)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="day must look like MM-DD-YY or YYYY-MM-DD") from exc
    return month, day_str


@router.get("/view")
async def get_view(
    mode: str = Query(default="live"),
    month: str | None = Query(default=None),
    day: str | None = Query(default=None),
) -> dict:
    month, day = _validate_filters(month, day)
    service = get_dashboard_service()
    items = service.get_view(mode, month, day)
    return {
        "mode": mode,
        "month": month,
        "day": day,
        "items": [item.to_blob() for item in items],
        "activity": [item.to_blob() for item in service.get_activity(mode, month, day)],
    }


@router.get("/stats")
async def get_stats(
    mode: str = Query(default="live"),
    month: str | None = Query(default=None),
    day: str | None = Query(default=None),
) -> dict:
    month, day = _validate_filters(month, day)
    service = get_dashboard_service()
    stats = service.get_stats(mode, month, day)
    return {"mode": mode, "month": month, "day": day, **stats.model_dump(mode="json", by_alias=True)}


@router.get("/dates")
async def get_available_dates(month: str = Query(...)) -> dict:
    if not is_month_key(month):
        raise HTTPException(status_code=400, detail="month must look like YYYY-MM")
    service = get_dashboard_service()
    return {"month": month, "items": service.available_dates(month)}


@router.get("/status")
async def get_status() -> dict:
    return get_dashboard_service().get_status()


@router.post("/refresh")
async def refresh_feed() -> dict:
    service = get_dashboard_service()
    try:
        summary = await service.refresh_async()
    except FeedError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    return summary


@router.get("/history")
async def get_history() -> dict:
    items = get_dashboard_service().history
    return {"count": len(items), "items": [item.to_blob() for item in items]}


@router.get("/history/export")
async def export_history() -> PlainTextResponse:
    csv_text = get_dashboard_service().export_history_csv()
    return PlainTextResponse(
        csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="history.csv"'},
    )


@router.delete("/history")
async def clear_history() -> dict:
    get_dashboard_service().clear_history()
    return {"count": 0}
