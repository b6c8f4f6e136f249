"""Unit tests for TimerService with mocked repositories."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.timekeeper.core.exceptions import (
    AlreadyFinishedError,
    InvariantViolationError,
    NoCurrentTimerError,
    NotFoundError,
    StoreUnavailableError,
)
from src.timekeeper.models import Project, Timer
from src.timekeeper.services import TimerService
from tests.helpers import FakeClock

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


@pytest.fixture
def mock_session() -> AsyncMock:
    """Create mock database session."""
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    return session


@pytest.fixture
def mock_timer_repo() -> MagicMock:
    repo = MagicMock()
    repo.get_current = AsyncMock(return_value=None)
    repo.get_by_unique_id = AsyncMock(return_value=None)
    repo.finish = AsyncMock(return_value=True)
    repo.insert_running = AsyncMock()
    repo.list_by_project = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def project() -> Project:
    return Project(id=7, unique_id="writing", name="Writing", is_current=True)


@pytest.fixture
def mock_project_repo(project: Project) -> MagicMock:
    repo = MagicMock()
    repo.get_current = AsyncMock(return_value=project)
    repo.get_by_unique_id = AsyncMock(return_value=project)
    return repo


@pytest.fixture
def timer_service(mock_timer_repo, mock_project_repo, mock_session, clock) -> TimerService:
    return TimerService(mock_timer_repo, mock_project_repo, mock_session, clock=clock)


def running_timer(start_time: int = 0) -> Timer:
    return Timer(id=1, unique_id="t1", project_id=7, start_time=start_time, is_current=True)


class TestStartTimer:
    async def test_start_inserts_running_timer(
        self, timer_service, mock_timer_repo, mock_session, clock: FakeClock
    ):
        mock_timer_repo.insert_running.return_value = running_timer(clock.now)

        view = await timer_service.start_timer("writing", timezone="UTC")

        args = mock_timer_repo.insert_running.call_args[0]
        assert args[1:] == (7, clock.now)
        assert view.is_current is True
        mock_timer_repo.finish.assert_not_called()
        mock_session.commit.assert_called_once()

    async def test_start_auto_stops_running_timer(
        self, timer_service, mock_timer_repo, clock: FakeClock
    ):
        clock.set(50)
        existing = running_timer(0)
        mock_timer_repo.get_current.return_value = existing
        mock_timer_repo.insert_running.return_value = running_timer(50)

        await timer_service.start_timer("writing")

        mock_timer_repo.finish.assert_called_once_with(existing.id, 50)

    async def test_start_unknown_project_rolls_back(
        self, timer_service, mock_project_repo, mock_timer_repo, mock_session
    ):
        mock_project_repo.get_by_unique_id.return_value = None

        with pytest.raises(NotFoundError):
            await timer_service.start_timer("missing")

        mock_timer_repo.insert_running.assert_not_called()
        mock_session.rollback.assert_called_once()
        mock_session.commit.assert_not_called()

    async def test_start_without_current_project(self, timer_service, mock_project_repo):
        mock_project_repo.get_current.return_value = None

        with pytest.raises(NotFoundError):
            await timer_service.start_timer()

    async def test_constraint_violation_becomes_invariant_error(
        self, timer_service, mock_timer_repo, mock_session
    ):
        mock_timer_repo.insert_running.side_effect = IntegrityError(
            "INSERT", {}, Exception("UNIQUE constraint failed: timers.is_current")
        )

        with pytest.raises(InvariantViolationError):
            await timer_service.start_timer("writing")

        mock_session.rollback.assert_called_once()

    async def test_locked_store_becomes_store_unavailable(
        self, timer_service, mock_timer_repo, mock_session
    ):
        mock_timer_repo.get_current.side_effect = OperationalError(
            "SELECT", {}, Exception("database is locked")
        )

        with pytest.raises(StoreUnavailableError):
            await timer_service.start_timer("writing")

        mock_session.rollback.assert_called_once()


class TestStopTimer:
    async def test_stop_without_running_timer(self, timer_service, mock_session):
        with pytest.raises(NoCurrentTimerError):
            await timer_service.stop_current_timer()

        mock_session.rollback.assert_called_once()
        mock_session.commit.assert_not_called()

    async def test_stop_charges_elapsed_seconds(
        self, timer_service, mock_timer_repo, clock: FakeClock
    ):
        clock.set(1090)
        mock_timer_repo.get_current.return_value = running_timer(1000)

        await timer_service.stop_current_timer()

        mock_timer_repo.finish.assert_called_once_with(1, 90)

    async def test_stop_clamps_clock_skew(self, timer_service, mock_timer_repo, clock: FakeClock):
        clock.set(900)
        mock_timer_repo.get_current.return_value = running_timer(1000)

        await timer_service.stop_current_timer()

        mock_timer_repo.finish.assert_called_once_with(1, 0)

    async def test_lost_race_raises_no_current_timer(self, timer_service, mock_timer_repo):
        mock_timer_repo.get_current.return_value = running_timer(0)
        mock_timer_repo.finish.return_value = False

        with pytest.raises(NoCurrentTimerError):
            await timer_service.stop_current_timer()

    async def test_stop_finished_timer_by_id(self, timer_service, mock_timer_repo):
        mock_timer_repo.get_by_unique_id.return_value = Timer(
            id=1, unique_id="t1", project_id=7, start_time=0, is_current=False, duration=5
        )

        with pytest.raises(AlreadyFinishedError):
            await timer_service.stop_timer("t1")

        mock_timer_repo.finish.assert_not_called()

    async def test_already_finished_is_a_no_current_timer_error(self):
        assert issubclass(AlreadyFinishedError, NoCurrentTimerError)
