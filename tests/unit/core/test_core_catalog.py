"""
이벤트 유형 카탈로그 / 표시 함수 테스트
"""

import pytest
from hypothesis import given, strategies as st
from rollcall.core import catalog
from rollcall.core.rollcall import initiate, mark_safe, resolve


class TestFormatElapsed:
    """MM:SS 포맷 테스트"""

    @pytest.mark.parametrize("seconds,expected", [
        (0, "00:00"),
        (5, "00:05"),
        (60, "01:00"),
        (599, "09:59"),
        (3600, "60:00"),
        (3725, "62:05"),
        (6000, "100:00"),
    ])
    def test_known_values(self, seconds, expected):
        assert catalog.format_elapsed(seconds) == expected

    def test_negative_clamped(self):
        assert catalog.format_elapsed(-3) == "00:00"

    @given(st.integers(min_value=0, max_value=10**7))
    def test_parses_back(self, seconds):
        """분/초로 다시 계산하면 원래 값"""
        mins, secs = catalog.format_elapsed(seconds).split(":")
        assert len(secs) == 2
        assert len(mins) >= 2
        assert int(mins) * 60 + int(secs) == seconds
        assert int(secs) < 60


class TestHeadlines:
    """제목/메시지 테스트"""

    def test_every_event_type_has_config(self):
        for kind in ("fire", "tornado", "active_shooter"):
            cfg = catalog.EVENT_TYPE_CONFIG[kind]
            assert {"label", "title", "instruction"} <= set(cfg)

    def test_headline_live_and_drill(self):
        assert catalog.headline("fire", False) == "Fire Emergency Protocol"
        assert catalog.headline("tornado", True) == "Tornado Drill"

    def test_title(self):
        assert catalog.title("active_shooter", False) == "ACTIVE SHOOTER"
        assert catalog.title("active_shooter", True) == "ACTIVE SHOOTER DRILL"

    def test_resolution_message(self, roster_abc):
        event = initiate(roster_abc, event_type="fire", is_drill=True, now=0.0)
        for pid in ("A", "B", "C"):
            event = mark_safe(event, pid, now=75.0).event
        event, _ = resolve(event, now=75.0)

        message = catalog.resolution_message(event)

        assert message.startswith("Drill protocol complete")
        assert "All 3 employees" in message
        assert "01:15" in message

    def test_initiated_message(self, roster_abc):
        event = initiate(roster_abc, event_type="tornado", is_drill=False, now=0.0)
        assert "MOVE TO SHELTER AREAS" in catalog.initiated_message(event)
        assert "3 personnel" in catalog.initiated_message(event)
