"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import os
import tempfile
from typing import List, Optional
import pytest
from rollcall.adapters.directory import StaticDirectory
from rollcall.adapters.scheduler import ManualClock, ManualScheduler
from rollcall.core.models import EmergencyEvent, RosterMember
from rollcall.orchestrators import RollCallOrchestrator, RosterLoader
from rollcall.settings import Settings


def make_member(person_id: str, first: Optional[str] = None, **kwargs) -> RosterMember:
    """테스트용 인원 생성"""
    return RosterMember(person_id=person_id, first_name=first or person_id, **kwargs)


class RecordingNotifier:
    """수신한 신호를 기록하는 알림 싱크"""

    def __init__(self):
        self.initiated: List[EmergencyEvent] = []
        self.resolved: List[EmergencyEvent] = []
        self.reset: List[EmergencyEvent] = []

    async def emergency_initiated(self, event):
        self.initiated.append(event)

    async def all_safe_resolved(self, event):
        self.resolved.append(event)

    async def event_reset(self, event):
        self.reset.append(event)


class RecordingHistory:
    """기록된 스냅샷을 보관하는 이력 저장소"""

    def __init__(self):
        self.records: List[EmergencyEvent] = []

    async def record(self, event):
        self.records.append(event)


class FailingDirectory:
    """항상 실패하는 디렉터리"""

    def __init__(self, error: Exception = ConnectionError("directory down")):
        self.error = error
        self.calls = 0

    async def fetch_roster(self, event_type, is_drill):
        self.calls += 1
        raise self.error


async def no_sleep(_delay: float) -> None:
    return None


@pytest.fixture
def temp_db_path():
    """임시 데이터베이스 파일 경로"""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        temp_path = f.name
    yield temp_path
    # 테스트 후 파일 정리
    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def sample_settings():
    """테스트용 설정"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    settings.observability.http_port = 8080
    return settings


@pytest.fixture
def roster_abc():
    """A, B, C 세 명 명단"""
    return [
        make_member("A", "Alice", last_name="Ng", department="Packaging", role="Operator"),
        make_member("B", "Bob", last_name="Ruiz", department="Maintenance", role="Technician"),
        make_member("C", "Cara", last_name="Olsen", department="QA", role="Inspector",
                    special_needs="Uses a wheelchair"),
    ]


@pytest.fixture
def clock():
    """가상 시계"""
    return ManualClock(start=1_000.0)


@pytest.fixture
def scheduler(clock):
    """가상 시간 스케줄러"""
    return ManualScheduler(clock)


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def history():
    return RecordingHistory()


@pytest.fixture
def make_orchestrator(clock, scheduler, notifier, history):
    """명단을 받아 오케스트레이터를 만드는 팩토리"""
    def _make(members=(), directory=None):
        loader = RosterLoader(directory or StaticDirectory(members), sleep=no_sleep)
        return RollCallOrchestrator(
            loader,
            scheduler,
            notifier=notifier,
            history=history,
            clock=clock,
            tick_interval_sec=1.0,
        )
    return _make


@pytest.fixture
def orchestrator(make_orchestrator, roster_abc):
    """A, B, C 명단 오케스트레이터"""
    return make_orchestrator(roster_abc)


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "slow: 느린 테스트 마커"
    )
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 통합 테스트 마커 추가
        if "integration" in item.name or "scenario" in item.nodeid:
            item.add_marker(pytest.mark.integration)
        if "stress" in item.name:
            item.add_marker(pytest.mark.slow)


@pytest.fixture(name="make_member")
def make_member_fixture():
    """인원 생성 함수"""
    return make_member


@pytest.fixture
def failing_directory():
    """항상 실패하는 디렉터리"""
    return FailingDirectory()
