"""Design route — evaluates enclosure responses using the engine."""

import logging

from fastapi import APIRouter, HTTPException, Request

from backend.models import ResponseCurve, ResponseRequest
from boxsim.constants import ResponseType
from boxsim.driver import driver_from_record
from boxsim.enclosure import enclosure_from_record
from boxsim.exceptions import BoxSimError
from boxsim.response import create_response, generate_frequencies

logger = logging.getLogger(__name__)

router = APIRouter()

_UNITS = {
    ResponseType.IMPEDANCE: "Ohm",
    ResponseType.SPL: "dB",
}


@router.post("/calculate-response", response_model=ResponseCurve)
async def calculate_response_endpoint(request: Request, body: ResponseRequest):
    """Evaluate a driver's response in an enclosure over a log-spaced frequency range."""
    env = request.app.state.environment
    record = request.app.state.driver_db.get_by_id(body.driver_id)
    if not record:
        raise HTTPException(status_code=404, detail="Driver not found")
    if body.freq_end <= body.freq_start:
        raise HTTPException(status_code=422, detail="freq_end must be greater than freq_start")

    try:
        driver = driver_from_record(record, strict=env.strict)
        enclosure = enclosure_from_record(body.enclosure)
        response = create_response(body.response_type, enclosure, driver, body.count, env)
        freqs = generate_frequencies(body.freq_start, body.freq_end, body.num_points)
        values = response.curve(freqs)
    except BoxSimError as e:
        logger.info("Response calculation rejected: %s", e.message)
        raise HTTPException(status_code=422, detail=e.message)

    return ResponseCurve(
        response_type=body.response_type,
        frequency=freqs.tolist(),
        values=values.tolist(),
        unit=_UNITS[body.response_type],
    )
