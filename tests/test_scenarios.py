"""
점호 시나리오 통합 테스트

이 모듈은 가상 시간으로 시작부터 리셋까지의 전체 흐름을 검증합니다.
"""

import pytest
from rollcall.core import catalog
from rollcall.core.errors import DoubleInitiate
from rollcall.core.models import MarkOutcome
from rollcall.core.rollcall import pending_of, safe_of


def _ids(entries):
    return [e.person_id for e in entries]


class TestRollCallScenarios:
    """점호 시나리오"""

    @pytest.mark.asyncio
    async def test_scenario_fire_emergency_full_accountability(self, orchestrator, scheduler, notifier, history):
        """화재 비상: 전원 확인 후 자동 종료, 리셋 시 이력 저장"""
        await orchestrator.initiate("fire", is_drill=False)
        assert _ids(pending_of(orchestrator.event)) == ["A", "B", "C"]

        scheduler.advance(12)
        await orchestrator.mark_safe("B")
        scheduler.advance(20)
        await orchestrator.mark_safe("A")
        assert orchestrator.state == "active_unresolved"
        assert _ids(safe_of(orchestrator.event)) == ["A", "B"]

        scheduler.advance(43)
        await orchestrator.mark_safe("C")

        event = orchestrator.event
        assert event.resolved is True
        assert event.elapsed_seconds == 75
        assert catalog.format_elapsed(event.elapsed_seconds) == "01:15"
        assert len(notifier.resolved) == 1
        assert "All 3 employees accounted for in 01:15" in catalog.resolution_message(event)

        scheduler.advance(300)
        assert orchestrator.event.elapsed_seconds == 75

        final = await orchestrator.reset()
        assert orchestrator.state == "idle"
        assert history.records == [final]
        assert final.resolved is True

    @pytest.mark.asyncio
    async def test_scenario_drill_partial_then_reset(self, orchestrator, scheduler, notifier, history):
        """훈련: 일부만 확인된 상태로 리셋"""
        event = await orchestrator.initiate("tornado", is_drill=True)
        assert catalog.headline(event.event_type, event.is_drill) == "Tornado Drill"

        scheduler.advance(30)
        await orchestrator.mark_safe("C")
        final = await orchestrator.reset()

        assert final.resolved is False
        assert final.pending_count == 2
        assert final.elapsed_seconds == 30
        assert notifier.resolved == []
        assert history.records[-1].is_drill is True

    @pytest.mark.asyncio
    async def test_scenario_redundant_and_unknown_marks(self, orchestrator, clock):
        """중복/미등록 표시는 상태를 바꾸지 않음"""
        await orchestrator.initiate("active_shooter")
        clock.advance(2)
        await orchestrator.mark_safe("A")
        snapshot = orchestrator.event

        clock.advance(5)
        assert (await orchestrator.mark_safe("A")).outcome is MarkOutcome.ALREADY_SAFE
        assert (await orchestrator.mark_safe("Z")).outcome is MarkOutcome.UNKNOWN_PERSON
        assert orchestrator.event is snapshot

    @pytest.mark.asyncio
    async def test_scenario_double_initiate_preserves_progress(self, orchestrator, scheduler):
        """진행 중 재시작 시도는 거부되고 진행 상황 유지"""
        first = await orchestrator.initiate("fire")
        scheduler.advance(10)
        await orchestrator.mark_safe("A")

        with pytest.raises(DoubleInitiate):
            await orchestrator.initiate("fire")

        assert orchestrator.event.event_id == first.event_id
        assert orchestrator.event.elapsed_seconds == 10
        assert _ids(safe_of(orchestrator.event)) == ["A"]

    @pytest.mark.asyncio
    async def test_scenario_empty_roster(self, make_orchestrator, scheduler, notifier):
        """빈 명단: 타이머만 흐르고 종료되지 않음"""
        orchestrator = make_orchestrator(())
        await orchestrator.initiate("fire", is_drill=True)

        scheduler.advance(3_725)

        assert catalog.format_elapsed(orchestrator.event.elapsed_seconds) == "62:05"
        assert orchestrator.state == "active_unresolved"
        assert notifier.resolved == []

    @pytest.mark.asyncio
    async def test_scenario_reset_and_restart(self, orchestrator, scheduler, history):
        """리셋 후 새 점호는 깨끗한 상태에서 시작"""
        await orchestrator.initiate("fire")
        for pid in ("A", "B", "C"):
            await orchestrator.mark_safe(pid)
        await orchestrator.reset()

        second = await orchestrator.initiate("tornado")
        scheduler.advance(4)

        assert orchestrator.state == "active_unresolved"
        assert second.pending_count == 3
        assert orchestrator.event.elapsed_seconds == 4
        assert len(scheduler.active_timers) == 1
        assert len(history.records) == 1
