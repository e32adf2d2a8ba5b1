"""
Errors raised by the roll-call engine.

Soft conditions (unknown person, redundant mark) are not exceptions;
they are reported through ``MarkOutcome``.
"""

from typing import Optional


class RollCallError(Exception):
    """점호 엔진 오류의 기본 클래스"""


class DirectoryUnavailable(RollCallError):
    """인원 디렉터리에서 명단을 가져올 수 없음"""

    def __init__(self, message: str, *, cause: Optional[Exception] = None):
        super().__init__(message)
        self.cause = cause


class DoubleInitiate(RollCallError):
    """이미 진행 중인 점호가 있는데 다시 시작하려 함"""

    def __init__(self, active_event_id: str):
        super().__init__(f"roll call {active_event_id} is already active; reset it first")
        self.active_event_id = active_event_id


class NoActiveRollCall(RollCallError):
    """진행 중인 점호가 없는데 인원 표시를 요청함"""

    def __init__(self):
        super().__init__("no roll call is active; initiate one first")
