"""
Unit tests for the nightly cleanup scheduler.
"""

import pytest
from contextlib import contextmanager
from unittest.mock import MagicMock, patch

from core.constants import CLEANUP_SCHEDULER_JOB_ID
from services.cleanup_registry import CleanupJobError, CleanupRegistry
from services.cleanup_scheduler import CleanupScheduler, get_cleanup_scheduler
from services.cleanup_service import (
    CleanupJobResult,
    CleanupRunResult,
    get_cleanup_locator,
    get_cleanup_registry,
)


@contextmanager
def fake_db_context():
    yield MagicMock()


class TestCleanupScheduler:
    @pytest.mark.asyncio
    async def test_start_registers_daily_job(self):
        scheduler = CleanupScheduler(hour=4)
        await scheduler.start_scheduler()
        try:
            job = scheduler.scheduler.get_job(CLEANUP_SCHEDULER_JOB_ID)
            assert job is not None
            assert job.name == "Database cleanup (fix mode)"
            assert scheduler.is_started
        finally:
            await scheduler.stop_scheduler()

        assert not scheduler.is_started

    @pytest.mark.asyncio
    async def test_start_twice_is_a_no_op(self):
        scheduler = CleanupScheduler()
        await scheduler.start_scheduler()
        try:
            await scheduler.start_scheduler()
            assert len(scheduler.scheduler.get_jobs()) == 1
        finally:
            await scheduler.stop_scheduler()

    def test_runs_in_fix_mode_with_its_registry(self):
        registry = CleanupRegistry({"Widgets": ["Soft Deleted Things"]})
        scheduler = CleanupScheduler(registry=registry)
        result = CleanupRunResult(dry_run=False, jobs=[
            CleanupJobResult(table="Widgets", job="Soft Deleted Things", count=2),
        ])

        with patch("services.cleanup_scheduler.get_db_context", fake_db_context), \
             patch("services.cleanup_scheduler.CleanupRunner") as runner_cls:
            runner_cls.return_value.run.return_value = result
            scheduler._execute_cleanup_logic()

        assert runner_cls.call_args.kwargs["registry"] is registry
        assert runner_cls.call_args.kwargs["locator"] is None
        runner_cls.return_value.run.assert_called_once_with(dry_run=False)

    def test_errors_are_logged_not_raised(self, caplog):
        scheduler = CleanupScheduler()

        with patch("services.cleanup_scheduler.get_db_context", fake_db_context), \
             patch("services.cleanup_scheduler.CleanupRunner") as runner_cls:
            runner_cls.return_value.run.side_effect = CleanupJobError("Secrets", "Hard Deleted Users", "boom")
            scheduler._execute_cleanup_logic()

        assert "Error during scheduled cleanup" in caplog.text

    def test_global_scheduler_runs_the_process_registry(self):
        scheduler = get_cleanup_scheduler()

        assert scheduler is get_cleanup_scheduler()
        assert scheduler.registry is get_cleanup_registry()
        assert scheduler.locator is get_cleanup_locator()
