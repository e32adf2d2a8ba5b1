"""
Roll-call orchestrator.

This module owns the single active ``EmergencyEvent`` and drives it
through the pure transitions in ``rollcall.core.rollcall``:

    Idle --initiate--> Active-Unresolved --all safe--> Active-Resolved
      ^                       |                             |
      +--------reset----------+-------------reset-----------+

The elapsed timer is a periodic scheduler callback. Notifications and
history writes happen after a transition has been committed, so a
failing collaborator never leaves the event half-updated.
"""

import asyncio
import time
from typing import Callable, List, Literal, Optional
from rollcall.core import rollcall
from rollcall.core.errors import DoubleInitiate, NoActiveRollCall
from rollcall.core.models import EmergencyEvent, EventType, MarkOutcome, MarkResult
from rollcall.observability import metrics
from rollcall.observability.logging_setup import get_logger
from rollcall.ports.history import AuditHistoryPort
from rollcall.ports.notify import NotificationSinkPort
from rollcall.ports.scheduler import CancelToken, Clock, SchedulerPort
from .roster_loader import RosterLoader

log = get_logger("rollcall.orchestrator")

RollCallState = Literal["idle", "active_unresolved", "active_resolved"]

Listener = Callable[[Optional[EmergencyEvent]], None]

# 신호 -> NotificationSinkPort 메서드
NOTIFY_METHODS = {
    "initiated": "emergency_initiated",
    "resolved": "all_safe_resolved",
    "reset": "event_reset",
}

class RollCallOrchestrator:
    """점호 오케스트레이터 (한 번에 하나의 점호만 진행)"""

    def __init__(self,
                 roster_loader: RosterLoader,
                 scheduler: SchedulerPort,
                 *,
                 notifier: Optional[NotificationSinkPort] = None,
                 history: Optional[AuditHistoryPort] = None,
                 clock: Clock = time.time,
                 tick_interval_sec: float = 1.0):
        """
        초기화합니다.

        Args:
            roster_loader: 명단 로더
            scheduler: 경과 타이머용 스케줄러
            notifier: 시작/종료 알림 싱크
            history: 리셋 시 최종 스냅샷을 받는 이력 저장소
            clock: epoch 초 시계
            tick_interval_sec: 경과 타이머 간격 (초)
        """
        self.roster_loader = roster_loader
        self.scheduler = scheduler
        self.notifier = notifier
        self.history = history
        self.clock = clock
        self.tick_interval = tick_interval_sec

        self._event: Optional[EmergencyEvent] = None
        self._timer: Optional[CancelToken] = None
        self._initiate_lock = asyncio.Lock()
        self._listeners: List[Listener] = []

    # ---- 조회 ----

    @property
    def event(self) -> Optional[EmergencyEvent]:
        """현재 이벤트 스냅샷 (idle 이면 None)"""
        return self._event

    @property
    def is_active(self) -> bool:
        return self._event is not None

    @property
    def state(self) -> RollCallState:
        if self._event is None:
            return "idle"
        return "active_resolved" if self._event.resolved else "active_unresolved"

    @property
    def timer_running(self) -> bool:
        return self._timer is not None and not self._timer.cancelled

    def add_listener(self, listener: Listener) -> None:
        """상태가 바뀔 때마다 현재 스냅샷을 받을 콜백을 등록합니다."""
        self._listeners.append(listener)

    # ---- 전이 ----

    async def initiate(self, event_type: EventType, is_drill: bool = False) -> EmergencyEvent:
        """
        점호를 시작합니다.

        Args:
            event_type: 비상 유형
            is_drill: 훈련 여부

        Returns:
            시작된 이벤트

        Raises:
            DoubleInitiate: 이미 점호가 진행 중인 경우 (기존 이벤트는 그대로)
            DirectoryUnavailable: 명단을 가져올 수 없는 경우 (idle 유지)
        """
        async with self._initiate_lock:
            if self._event is not None:
                metrics.initiate_rejected.labels(reason="double_initiate").inc()
                log.warning(f"점호 중복 시작 거부 active:{self._event.event_id}")
                raise DoubleInitiate(self._event.event_id)

            roster = await self.roster_loader.load_roster(event_type, is_drill)

            event = rollcall.initiate(
                roster, event_type=event_type, is_drill=is_drill, now=self.clock()
            )
            self._event = event
            self._timer = self.scheduler.schedule(self.tick_interval, self._tick_callback(event.event_id))

        drill = "true" if is_drill else "false"
        metrics.events_initiated.labels(event_type=event_type, drill=drill).inc()
        self._update_gauges()
        if not event.entries:
            log.warning(f"빈 명단으로 점호 시작, 자동 종료되지 않음 event_id:{event.event_id}")
        log.info(f"점호 시작 event_id:{event.event_id} type:{event_type} drill:{is_drill} "
                 f"roster:{event.roster_size}")

        self._publish()
        await self._notify("initiated", event)
        return event

    async def mark_safe(self, person_id: str) -> MarkResult:
        """
        인원을 안전으로 표시하고 자동 종료 규칙을 적용합니다.

        Args:
            person_id: 대상 인원 ID

        Returns:
            결과 (event 는 자동 종료까지 반영된 스냅샷)

        Raises:
            NoActiveRollCall: 진행 중인 점호가 없는 경우
        """
        if self._event is None:
            raise NoActiveRollCall()

        now = self.clock()
        result = rollcall.mark_safe(self._event, person_id, now=now)

        if result.outcome is MarkOutcome.UNKNOWN_PERSON:
            metrics.mark_safe_noop.labels(reason="unknown_person").inc()
            log.warning(f"명단에 없는 인원 표시 요청 무시 person_id:{person_id}")
            return result
        if result.outcome is MarkOutcome.ALREADY_SAFE:
            metrics.mark_safe_noop.labels(reason="already_safe").inc()
            log.debug(f"이미 안전 확인된 인원 person_id:{person_id}")
            return result

        metrics.members_marked_safe.inc()
        self._event = result.event
        log.info(f"안전 확인 person_id:{person_id} pending:{self._event.pending_count}")

        resolved_now = self._apply_resolution(now)
        self._update_gauges()
        self._publish()

        if resolved_now:
            await self._notify("resolved", self._event)
        return result.model_copy(update={"event": self._event})

    async def evaluate_resolution(self) -> bool:
        """
        자동 종료 규칙을 다시 평가합니다. 중복 호출해도 종료 신호는 한 번뿐입니다.

        Returns:
            이번 호출에서 종료되었는지 여부
        """
        if self._event is None:
            return False
        resolved_now = self._apply_resolution(self.clock())
        if resolved_now:
            self._update_gauges()
            self._publish()
            await self._notify("resolved", self._event)
        return resolved_now

    async def reset(self) -> Optional[EmergencyEvent]:
        """
        점호를 종료하고 idle 로 돌아갑니다. 어느 상태에서든 호출 가능합니다.

        Returns:
            리셋 직전의 최종 스냅샷 (idle 이었으면 None)
        """
        event = self._event
        self._cancel_timer()
        if event is None:
            return None

        final = rollcall.tick(event, now=self.clock())
        self._event = None

        metrics.events_reset.labels(resolved="true" if final.resolved else "false").inc()
        self._update_gauges()
        log.info(f"점호 리셋 event_id:{final.event_id} resolved:{final.resolved} "
                 f"safe:{final.safe_count}/{final.roster_size}")
        self._publish()

        if self.history is not None:
            try:
                await self.history.record(final)
            except Exception as e:
                log.error(f"점호 이력 저장 실패 event_id:{final.event_id} error:{e}")
        await self._notify("reset", final)
        return final

    def shutdown(self) -> None:
        """서비스 종료 시 타이머만 정리합니다 (이벤트는 메모리에서 사라짐)."""
        if self._event is not None:
            log.warning(f"진행 중인 점호를 남긴 채 종료 event_id:{self._event.event_id}")
        self._cancel_timer()

    # ---- 내부 ----

    def _tick_callback(self, event_id: str) -> Callable[[], None]:
        def _tick() -> None:
            event = self._event
            # 리셋되었거나 다른 세션으로 교체된 경우 무시
            if event is None or event.event_id != event_id or event.resolved:
                return
            updated = rollcall.tick(event, now=self.clock())
            if updated is not event:
                self._event = updated
                self._publish()
        return _tick

    def _apply_resolution(self, now: float) -> bool:
        event, resolved_now = rollcall.resolve(self._event, now=now)
        if not resolved_now:
            return False

        self._event = event
        self._cancel_timer()
        drill = "true" if event.is_drill else "false"
        metrics.events_resolved.labels(event_type=event.event_type, drill=drill).inc()
        metrics.time_to_resolution_seconds.observe(event.resolved_at - event.started_at)
        log.info(f"전원 안전 확인, 점호 자동 종료 event_id:{event.event_id} "
                 f"elapsed:{event.elapsed_seconds}s")
        return True

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _update_gauges(self) -> None:
        metrics.active_event.set(1 if self._event is not None else 0)
        metrics.pending_members.set(self._event.pending_count if self._event is not None else 0)

    def _publish(self) -> None:
        for listener in self._listeners:
            try:
                listener(self._event)
            except Exception:
                log.exception("상태 리스너 오류")

    async def _notify(self, signal: str, event: EmergencyEvent) -> None:
        if self.notifier is None:
            return
        try:
            await getattr(self.notifier, NOTIFY_METHODS[signal])(event)
        except Exception as e:
            metrics.notification_failures.labels(sink=type(self.notifier).__name__, signal=signal).inc()
            log.error(f"알림 발송 실패 signal:{signal} event_id:{event.event_id} error:{e}")
