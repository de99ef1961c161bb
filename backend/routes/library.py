"""Library routes — driver database and derived driver parameters."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from backend.models import DriverListResponse, DriverParameters, DriverSummary
from boxsim.driver import driver_from_record
from boxsim.exceptions import BoxSimError

router = APIRouter()


def _summary(record: dict) -> DriverSummary:
    info = record.get("general_info", {})
    return DriverSummary(
        id=str(info.get("uuid") or ""),
        manufacturer=str(info.get("manufacturer") or ""),
        brand=str(info.get("brand") or ""),
        model=str(info.get("model") or ""),
        speaker_type=str(info.get("speaker_type") or ""),
    )


@router.get("/library/drivers", response_model=DriverListResponse)
async def list_drivers(
    request: Request,
    q: Optional[str] = Query(None, description="Search query"),
    manufacturer: Optional[str] = Query(None),
    speaker_type: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    """Search and list driver records."""
    db = request.app.state.driver_db
    drivers = db.search(query=q, manufacturer=manufacturer, speaker_type=speaker_type)

    # Paginate
    total = len(drivers)
    drivers = drivers[offset:offset + limit]

    return DriverListResponse(drivers=[_summary(d) for d in drivers], total=total)


@router.get("/library/drivers/{driver_id}", response_model=DriverParameters)
async def get_driver(request: Request, driver_id: str):
    """Get a driver's full parameter set, with missing values derived."""
    db = request.app.state.driver_db
    record = db.get_by_id(driver_id)
    if not record:
        raise HTTPException(status_code=404, detail="Driver not found")

    try:
        driver = driver_from_record(record, strict=request.app.state.environment.strict)
    except BoxSimError as e:
        raise HTTPException(status_code=422, detail=e.message)

    return DriverParameters(
        id=driver.uuid,
        manufacturer=driver.manufacturer,
        model=driver.model,
        speaker_type=driver.speaker_type,
        re=driver.re,
        le=driver.le,
        bl=driver.bl,
        fs=driver.fs,
        qms=driver.qms,
        qes=driver.qes,
        qts=driver.qts,
        mms=driver.mms,
        cms=driver.cms,
        stiffness=driver.stiffness,
        rms=driver.rms,
        sd=driver.sd,
        vas=driver.vas,
        xmax=driver.xmax,
        vd=driver.vd,
        sensitivity=driver.sensitivity,
    )
