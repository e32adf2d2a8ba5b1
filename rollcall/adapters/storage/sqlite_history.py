"""
SQLite-based audit history for roll-call events.

The orchestrator hands the final snapshot of each event to this store
right before reset. Listing supports the same filters as the event log
screen (all / unresolved / drills / resolved).
"""

import time
from typing import Dict, List, Literal, Optional
import aiosqlite
from rollcall.core.models import EmergencyEvent
from rollcall.observability.logging_setup import get_logger

log = get_logger("rollcall.history")

HistoryFilter = Literal["all", "unresolved", "drills", "resolved"]

# SQLite 스키마
SCHEMA = """
CREATE TABLE IF NOT EXISTS rollcall_events (
    event_id TEXT PRIMARY KEY,
    event_type TEXT NOT NULL,
    is_drill INTEGER NOT NULL,
    started_at REAL NOT NULL,
    resolved INTEGER NOT NULL,
    resolved_at REAL,
    elapsed_seconds INTEGER NOT NULL,
    roster_size INTEGER NOT NULL,
    safe_count INTEGER NOT NULL,
    closed_at REAL NOT NULL,
    snapshot TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_rollcall_started ON rollcall_events(started_at);
"""

FILTER_SQL = {
    "all": "",
    "unresolved": "WHERE resolved = 0",
    "drills": "WHERE is_drill = 1",
    "resolved": "WHERE resolved = 1",
}

class SQLiteHistoryStore:
    """SQLite 기반 점호 이력 저장소"""
    
    def __init__(self, path: str):
        """
        초기화합니다.
        
        Args:
            path: SQLite 데이터베이스 파일 경로
        """
        self.path = path
    
    async def init(self) -> None:
        """데이터베이스를 초기화합니다."""
        async with aiosqlite.connect(self.path) as db:
            await db.executescript(SCHEMA)
            await db.commit()
        log.info(f"SQLiteHistoryStore 스키마 초기화 완료: {self.path}")
    
    async def record(self, event: EmergencyEvent) -> None:
        """
        최종 이벤트 스냅샷을 저장합니다. 같은 event_id 는 덮어씁니다.
        
        Args:
            event: 리셋 직전 이벤트
        """
        async with aiosqlite.connect(self.path) as db:
            await db.execute(
                "INSERT OR REPLACE INTO rollcall_events "
                "(event_id, event_type, is_drill, started_at, resolved, resolved_at, "
                " elapsed_seconds, roster_size, safe_count, closed_at, snapshot) "
                "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    event.event_id,
                    event.event_type,
                    1 if event.is_drill else 0,
                    event.started_at,
                    1 if event.resolved else 0,
                    event.resolved_at,
                    event.elapsed_seconds,
                    event.roster_size,
                    event.safe_count,
                    time.time(),
                    event.model_dump_json(),
                )
            )
            await db.commit()
        log.info(f"점호 이력 저장 event_id:{event.event_id} resolved:{event.resolved}")
    
    async def get(self, event_id: str) -> Optional[EmergencyEvent]:
        """event_id 로 스냅샷을 조회합니다."""
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                "SELECT snapshot FROM rollcall_events WHERE event_id = ?", (event_id,)
            )
            row = await cursor.fetchone()
        return EmergencyEvent.model_validate_json(row[0]) if row else None
    
    async def list_events(self, filter: HistoryFilter = "all", limit: int = 50) -> List[EmergencyEvent]:
        """
        최근 이벤트부터 스냅샷 목록을 조회합니다.
        
        Args:
            filter: all | unresolved | drills | resolved
            limit: 최대 개수
        """
        if filter not in FILTER_SQL:
            raise ValueError(f"unknown history filter: {filter}")
        
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                f"SELECT snapshot FROM rollcall_events {FILTER_SQL[filter]} "
                "ORDER BY started_at DESC LIMIT ?",
                (limit,)
            )
            rows = await cursor.fetchall()
        return [EmergencyEvent.model_validate_json(r[0]) for r in rows]
    
    async def stats(self) -> Dict[str, int]:
        """전체/미해결/훈련/해결 건수"""
        async with aiosqlite.connect(self.path) as db:
            cursor = await db.execute(
                "SELECT COUNT(*), "
                "COALESCE(SUM(CASE WHEN resolved = 0 THEN 1 ELSE 0 END), 0), "
                "COALESCE(SUM(is_drill), 0), "
                "COALESCE(SUM(resolved), 0) "
                "FROM rollcall_events"
            )
            total, unresolved, drills, resolved = await cursor.fetchone()
        return {"total": total, "unresolved": unresolved, "drills": drills, "resolved": resolved}
