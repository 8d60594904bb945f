"""
Estimates API.

POST /api/estimates/process — validate rows, estimate each room, summarize the project
"""

import logging

from fastapi import APIRouter, HTTPException

from ..estimate_pipeline import BatchTooLargeError, EstimatePipeline
from ..rates import ConfigurationOutOfRangeError, build_rate_configuration
from ..schemas import BatchResponse, ProcessRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimates", tags=["estimates"])

# Singleton; the pipeline holds no per-request state
_pipeline = EstimatePipeline()


@router.post("/process", response_model=BatchResponse)
def process_rows(request: ProcessRequest):
    """
    Estimate a batch of assessment rows.

    Invalid rows are skipped and reported in `errors`; the response is still
    200 when no row succeeds (success=false, room_count=0).
    """
    try:
        rates = build_rate_configuration(request.config)
    except ConfigurationOutOfRangeError as e:
        raise HTTPException(status_code=422, detail=e.errors)

    try:
        return _pipeline.process(request.rows, rates)
    except BatchTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
