"""HTTP API for rail disruption predictions."""

from typing import Dict, Optional

from fastapi import APIRouter, Query
from pydantic import BaseModel

from .config import settings
from .data_sources import build_data_source
from .domain import LineType, PredictionResult
from .prediction_service import get_prediction
from .tables import DEFAULT_BASELINE, LINE_BASELINES
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="rail_risk/api")

router = APIRouter()
DATA_SOURCE = build_data_source(settings)


class LinesResponse(BaseModel):
    """Known lines and their static baseline risk."""
    lines: Dict[str, int]
    default_baseline: int


@router.get("/lines", response_model=LinesResponse)
def list_lines() -> LinesResponse:
    """Return the baseline table for display."""
    return LinesResponse(lines=dict(LINE_BASELINES), default_baseline=DEFAULT_BASELINE)


@router.get("/prediction", response_model=PredictionResult)
async def prediction(
    line: str = Query(..., min_length=1, description="Line name, e.g. 'Ronkonkoma'"),
    line_type: Optional[LineType] = Query(default=None, description="Network tag"),
) -> PredictionResult:
    """Current disruption risk for one line."""
    if line not in LINE_BASELINES:
        logger.debug("Unknown line requested; using default baseline", extra={"line": line})
    return await get_prediction(line, line_type, data_source=DATA_SOURCE, settings=settings)
