"""
Port 모듈 단위 테스트

이 모듈은 어댑터들이 포트 인터페이스를 충족하는지 테스트합니다.
"""

import inspect
import pytest
from rollcall.adapters.directory import FileDirectory, HttpDirectory, StaticDirectory
from rollcall.adapters.notify import FanoutNotifier, HomeAssistantNotifier, LoggingNotifier, MqttNotifier
from rollcall.adapters.scheduler import AsyncioScheduler, ManualScheduler
from rollcall.adapters.storage import SQLiteHistoryStore
from rollcall.ports import AuditHistoryPort, NotificationSinkPort, PersonnelDirectoryPort, SchedulerPort


def _implements(impl, port):
    """포트의 공개 메서드를 같은 동기/비동기 형태로 구현했는지"""
    for name, member in vars(port).items():
        if name.startswith("_") or not callable(member):
            continue
        method = getattr(impl, name, None)
        assert method is not None, f"{impl.__name__}.{name} 없음"
        assert inspect.iscoroutinefunction(method) == inspect.iscoroutinefunction(member), name


class TestPortConformance:
    """포트 적합성 테스트"""

    @pytest.mark.parametrize("impl", [StaticDirectory, FileDirectory, HttpDirectory])
    def test_directory_adapters(self, impl):
        _implements(impl, PersonnelDirectoryPort)

    @pytest.mark.parametrize("impl", [LoggingNotifier, FanoutNotifier, MqttNotifier, HomeAssistantNotifier])
    def test_notification_sinks(self, impl):
        _implements(impl, NotificationSinkPort)

    def test_history_store(self):
        _implements(SQLiteHistoryStore, AuditHistoryPort)

    @pytest.mark.parametrize("impl", [AsyncioScheduler, ManualScheduler])
    def test_schedulers(self, impl):
        _implements(impl, SchedulerPort)

    def test_test_doubles_match_ports(self, notifier, history):
        """테스트용 더블도 포트 형태를 따름"""
        _implements(type(notifier), NotificationSinkPort)
        _implements(type(history), AuditHistoryPort)
