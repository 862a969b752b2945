"""
Status Route - Service health

Reports whether the grid backend answers. The check reads only the header
row of the event sheet.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from sheetcal import __version__
from sheetcal.api.dependencies import get_mapper
from sheetcal.api.models import HealthCheck
from sheetcal.sheets.a1 import row_range
from sheetcal.sheets.errors import BackendFailure
from sheetcal.sheets.mapper import WRITE_WIDTH, EventSheetMapper

logger = logging.getLogger(__name__)


router = APIRouter()


@router.get("/health", response_model=HealthCheck)
async def health_check(mapper: EventSheetMapper = Depends(get_mapper)):
    """
    Check system health status.

    Returns overall health and the status of the spreadsheet backend.
    """
    services = {}

    try:
        await mapper.backend.read_range(row_range(mapper.sheet_name, 1, WRITE_WIDTH))
        services["sheet"] = "healthy"
    except BackendFailure as e:
        logger.error(f"Sheet health check failed: {e}")
        services["sheet"] = "unhealthy"

    overall = "healthy" if services["sheet"] == "healthy" else "degraded"

    return HealthCheck(
        status=overall,
        version=__version__,
        timestamp=datetime.now(),
        backend=mapper.backend.backend_name,
        services=services,
    )
