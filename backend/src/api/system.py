# pyright: reportMissingTypeStubs=false
"""
System maintenance API endpoints.

Lets operators run the database cleanup on demand, either as a dry run
(report only) or in fix mode.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from auth.dependencies import require_maintenance_token
from core.database import get_db
from services.cleanup_registry import CleanupError, CleanupRegistry
from services.cleanup_service import CleanupRunner, get_cleanup_locator, get_cleanup_registry
from services.cleanup_tables import CleanupTableLocator

logger = logging.getLogger(__name__)

router = APIRouter()


class CleanupJobResponse(BaseModel):
    """Issue count of one cleanup job."""
    table: str
    job: str
    count: int


class CleanupRunResponse(BaseModel):
    """Response model for a cleanup run."""
    dry_run: bool
    total: int
    jobs: List[CleanupJobResponse]
    messages: List[str]


@router.post("/cleanup", summary="Run the database cleanup")
async def run_database_cleanup(
    dry_run: bool = Query(True, description="Only report issues, don't fix them"),
    _: None = Depends(require_maintenance_token),
    db: Session = Depends(get_db),
    registry: CleanupRegistry = Depends(get_cleanup_registry),
    locator: CleanupTableLocator = Depends(get_cleanup_locator)
) -> CleanupRunResponse:
    """
    Scan the database for orphaned rows and report or fix them.

    Defaults to a dry run; pass dry_run=false to repair. Runs the process-wide
    registry, including jobs merged in by plugins at startup.
    """
    try:
        result = CleanupRunner(db, registry=registry, locator=locator).run(dry_run=dry_run)
    except CleanupError as e:
        logger.error(f"Database cleanup failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )

    return CleanupRunResponse(
        dry_run=result.dry_run,
        total=result.total,
        jobs=[
            CleanupJobResponse(table=job.table, job=job.job, count=job.count)
            for job in result.jobs
        ],
        messages=result.messages(),
    )
