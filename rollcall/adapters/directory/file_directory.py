"""
File-based personnel directory.

Reads personnel exports in CSV, JSON or XLSX form. Each fetch re-reads
the file so a roll call always snapshots the current export.
"""

import asyncio
import csv
import json
import os
from typing import Any, Dict, Iterable, List, Optional
import openpyxl
from rollcall.core.models import EventType, RosterMember
from rollcall.observability.logging_setup import get_logger

log = get_logger("rollcall.directory.file")

# 헤더 별칭 -> 필드명
COLUMN_ALIASES = {
    "person_id": ("person_id", "id", "employee_id", "employee_code"),
    "first_name": ("first_name", "firstname", "first"),
    "last_name": ("last_name", "lastname", "last"),
    "department": ("department", "department_code", "dept"),
    "role": ("role", "position", "title"),
    "is_kiosk_user": ("is_kiosk_user", "kiosk", "kiosk_user"),
    "special_needs": ("special_needs", "needs", "notes"),
    "event_types": ("event_types",),
}

TRUTHY = {"1", "true", "yes", "y", "on"}

def _pick(row: Dict[str, Any], field: str) -> Any:
    for alias in COLUMN_ALIASES[field]:
        if alias in row and row[alias] not in (None, ""):
            return row[alias]
    return None

def _to_member(row: Dict[str, Any]) -> Optional[RosterMember]:
    """행을 RosterMember 로 변환합니다. 식별자가 없으면 None."""
    row = {str(k).strip().lower(): v for k, v in row.items() if k is not None}
    pid = _pick(row, "person_id")
    first = _pick(row, "first_name")
    if pid is None or first is None:
        return None
    
    kiosk = _pick(row, "is_kiosk_user")
    if isinstance(kiosk, str):
        kiosk = kiosk.strip().lower() in TRUTHY
    needs = _pick(row, "special_needs")
    
    return RosterMember(
        person_id=str(pid).strip(),
        first_name=str(first).strip(),
        last_name=str(_pick(row, "last_name") or "").strip(),
        department=str(_pick(row, "department") or "").strip(),
        role=str(_pick(row, "role") or "").strip(),
        is_kiosk_user=bool(kiosk),
        special_needs=str(needs).strip() if needs is not None else None,
    )

def _applies_to(row: Dict[str, Any], event_type: Optional[str]) -> bool:
    """event_types 컬럼이 있으면 해당 유형에만 포함"""
    if event_type is None:
        return True
    row = {str(k).strip().lower(): v for k, v in row.items() if k is not None}
    raw = _pick(row, "event_types")
    if raw is None:
        return True
    kinds = {k.strip() for k in str(raw).replace(",", ";").split(";") if k.strip()}
    return not kinds or event_type in kinds

def _read_rows(path: str) -> Iterable[Dict[str, Any]]:
    ext = os.path.splitext(path)[1].lower()
    
    if ext == ".csv":
        with open(path, newline="", encoding="utf-8-sig") as f:
            return list(csv.DictReader(f))
    if ext == ".json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("personnel") or data.get("employees") or []
        if not isinstance(data, list):
            raise ValueError("JSON 명단은 리스트 또는 personnel 키를 가져야 합니다")
        return data
    if ext in (".xlsx", ".xlsm"):
        wb = openpyxl.load_workbook(path, read_only=True, data_only=True)
        try:
            ws = wb.active
            rows = ws.iter_rows(values_only=True)
            headers = next(rows, None)
            if headers is None:
                return []
            log.info(f"엑셀 헤더 확인: {headers}")
            return [dict(zip(headers, r)) for r in rows]
        finally:
            wb.close()
    raise ValueError(f"지원하지 않는 파일 형식: {ext}")

def load_personnel(path: str, event_type: Optional[str] = None) -> List[RosterMember]:
    """
    인원 명단 파일을 로드합니다.
    
    Args:
        path: CSV / JSON / XLSX 파일 경로
        event_type: 지정하면 event_types 컬럼으로 필터링
        
    Returns:
        명단 (파일 순서 유지)
    """
    members: List[RosterMember] = []
    for row_num, row in enumerate(_read_rows(path), start=2):
        if not _applies_to(row, event_type):
            continue
        member = _to_member(row)
        if member is None:
            log.warning(f"행 {row_num} 식별자/이름 없음, 건너뜀: {row}")
            continue
        members.append(member)
    
    log.info(f"인원 명단 로드됨 path:{path} count:{len(members)}")
    return members

class FileDirectory:
    """파일 기반 인원 디렉터리"""
    
    def __init__(self, path: str):
        self.path = path
    
    async def fetch_roster(self, event_type: EventType, is_drill: bool) -> List[RosterMember]:
        return await asyncio.to_thread(load_personnel, self.path, event_type)
