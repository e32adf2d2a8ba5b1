"""
HTTP endpoints for the roll-call service.

This module implements health, readiness, metrics and info endpoints
plus the roll-call control surface used by operator devices.
"""

import time
from typing import Optional
from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import Response, JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from pydantic import BaseModel
from rollcall.adapters.storage.sqlite_history import SQLiteHistoryStore
from rollcall.core import catalog
from rollcall.core.errors import DirectoryUnavailable, DoubleInitiate, NoActiveRollCall
from rollcall.core.models import EmergencyEvent, EventType
from rollcall.core.rollcall import pending_of, safe_of
from rollcall.orchestrators.roll_call import RollCallOrchestrator
from rollcall.settings import Settings
from rollcall.observability.logging_setup import get_logger

log = get_logger("rollcall.http")

class InitiateRequest(BaseModel):
    event_type: EventType = "fire"
    drill: bool = False

def event_view(event: EmergencyEvent) -> dict:
    """이벤트를 화면/API 용 딕셔너리로 변환합니다."""
    def _entry(e):
        return {
            "personId": e.person_id,
            "name": e.member.display_name,
            "department": e.member.department,
            "role": e.member.role,
            "isKioskUser": e.member.is_kiosk_user,
            "specialNeeds": e.member.special_needs,
            "status": e.status,
            "markedSafeAt": e.marked_safe_at,
        }

    cfg = catalog.EVENT_TYPE_CONFIG[event.event_type]
    return {
        "eventId": event.event_id,
        "eventType": event.event_type,
        "drill": event.is_drill,
        "title": catalog.title(event.event_type, event.is_drill),
        "headline": catalog.headline(event.event_type, event.is_drill),
        "instruction": cfg["instruction"],
        "startedAt": event.started_at,
        "elapsedSeconds": event.elapsed_seconds,
        "elapsed": catalog.format_elapsed(event.elapsed_seconds),
        "resolved": event.resolved,
        "resolvedAt": event.resolved_at,
        "rosterSize": event.roster_size,
        "pending": [_entry(e) for e in pending_of(event)],
        "safe": [_entry(e) for e in safe_of(event)],
    }

def create_app(settings: Settings,
               orchestrator: RollCallOrchestrator,
               history: Optional[SQLiteHistoryStore] = None) -> FastAPI:
    """FastAPI 애플리케이션을 생성합니다."""
    app = FastAPI(
        title=settings.observability.service_name,
        version=settings.observability.build_version,
        description="Emergency roll-call accountability service"
    )

    start_time = time.time()

    @app.get("/health")
    async def health():
        """헬스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ok",
            "service": settings.observability.service_name,
            "timestamp": time.time()
        })

    @app.get("/ready")
    async def ready():
        """레디니스 체크 엔드포인트"""
        return JSONResponse({
            "status": "ready",
            "service": settings.observability.service_name,
            "rollcall": orchestrator.state,
            "timestamp": time.time()
        })

    @app.get("/metrics")
    async def metrics():
        """Prometheus 메트릭 엔드포인트"""
        if not settings.observability.metrics_enabled:
            raise HTTPException(status_code=503, detail="Metrics disabled")
        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.get("/info")
    async def info():
        """서비스 정보 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "build_date": settings.observability.build_date,
            "uptime_seconds": int(time.time() - start_time),
            "metrics_enabled": settings.observability.metrics_enabled,
            "log_level": settings.observability.log_level,
            "directory_source": settings.directory.source,
        })

    @app.get("/rollcall")
    async def rollcall_status():
        """현재 점호 상태"""
        event = orchestrator.event
        return {
            "state": orchestrator.state,
            "event": event_view(event) if event is not None else None,
        }

    @app.post("/rollcall/initiate", status_code=201)
    async def rollcall_initiate(req: InitiateRequest):
        """점호 시작"""
        try:
            event = await orchestrator.initiate(req.event_type, req.drill)
        except DoubleInitiate as e:
            raise HTTPException(status_code=409, detail=str(e))
        except DirectoryUnavailable as e:
            raise HTTPException(status_code=503, detail=str(e))
        return {"state": orchestrator.state, "event": event_view(event)}

    @app.post("/rollcall/members/{person_id}/safe")
    async def rollcall_mark_safe(person_id: str):
        """인원 안전 확인"""
        try:
            result = await orchestrator.mark_safe(person_id)
        except NoActiveRollCall as e:
            raise HTTPException(status_code=409, detail=str(e))
        return {
            "outcome": result.outcome.value,
            "state": orchestrator.state,
            "event": event_view(result.event),
        }

    @app.post("/rollcall/reset")
    async def rollcall_reset():
        """점호 종료/리셋"""
        final = await orchestrator.reset()
        return {
            "state": orchestrator.state,
            "final": event_view(final) if final is not None else None,
        }

    @app.get("/history")
    async def history_list(filter: str = Query("all"), limit: int = Query(50, ge=1, le=500)):
        """종료된 점호 이력"""
        if history is None:
            raise HTTPException(status_code=404, detail="history disabled")
        try:
            events = await history.list_events(filter, limit)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return {"filter": filter, "events": [event_view(e) for e in events]}

    @app.get("/history/stats")
    async def history_stats():
        """이력 통계"""
        if history is None:
            raise HTTPException(status_code=404, detail="history disabled")
        return await history.stats()

    @app.get("/")
    async def root():
        """루트 엔드포인트"""
        return JSONResponse({
            "service": settings.observability.service_name,
            "version": settings.observability.build_version,
            "endpoints": {
                "health": "/health",
                "ready": "/ready",
                "metrics": "/metrics",
                "info": "/info",
                "rollcall": "/rollcall",
                "history": "/history"
            }
        })

    return app
