"""
인원 디렉터리 어댑터 단위 테스트

이 모듈은 파일(CSV/JSON/XLSX) / HTTP / 정적 디렉터리를 테스트합니다.
"""

import json
import pytest
import openpyxl
from unittest.mock import AsyncMock, MagicMock, Mock
from rollcall.adapters.directory import FileDirectory, HttpDirectory, StaticDirectory, load_personnel


class TestLoadPersonnel:
    """파일 명단 로드 테스트"""

    def test_csv_with_aliases(self, tmp_path):
        """별칭 헤더와 BOM 처리"""
        path = tmp_path / "staff.csv"
        path.write_text(
            "﻿Employee_ID,First_Name,Last_Name,Position,Department,Kiosk,Special_Needs\n"
            "e1,Dana,Kim,Operator,Packaging,yes,\n"
            "e2,Eli,Park,Lead,QA,no,Hearing impaired\n",
            encoding="utf-8",
        )

        members = load_personnel(str(path))

        assert [m.person_id for m in members] == ["e1", "e2"]
        assert members[0].role == "Operator"
        assert members[0].is_kiosk_user is True
        assert members[0].special_needs is None
        assert members[1].is_kiosk_user is False
        assert members[1].special_needs == "Hearing impaired"

    def test_rows_without_identity_skipped(self, tmp_path):
        path = tmp_path / "staff.csv"
        path.write_text("id,first_name\n,Nobody\ne3,\ne4,Fay\n", encoding="utf-8")

        assert [m.person_id for m in load_personnel(str(path))] == ["e4"]

    def test_event_types_column_filters(self, tmp_path):
        """event_types 컬럼으로 유형별 명단"""
        path = tmp_path / "staff.csv"
        path.write_text(
            "id,first_name,event_types\n"
            "e1,Dana,fire;tornado\n"
            "e2,Eli,active_shooter\n"
            "e3,Fay,\n",
            encoding="utf-8",
        )

        assert [m.person_id for m in load_personnel(str(path), "fire")] == ["e1", "e3"]
        assert [m.person_id for m in load_personnel(str(path), "active_shooter")] == ["e2", "e3"]
        assert len(load_personnel(str(path))) == 3

    def test_json_list_and_object(self, tmp_path):
        as_list = tmp_path / "list.json"
        as_list.write_text(json.dumps([{"person_id": "e1", "first_name": "Dana"}]), encoding="utf-8")
        as_obj = tmp_path / "obj.json"
        as_obj.write_text(json.dumps({"employees": [{"id": "e2", "first_name": "Eli"}]}), encoding="utf-8")

        assert load_personnel(str(as_list))[0].person_id == "e1"
        assert load_personnel(str(as_obj))[0].person_id == "e2"

    def test_json_invalid_shape(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('"just a string"', encoding="utf-8")

        with pytest.raises(ValueError):
            load_personnel(str(path))

    def test_xlsx(self, tmp_path):
        """엑셀 명단"""
        path = tmp_path / "staff.xlsx"
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.append(["employee_code", "first_name", "last_name", "department"])
        ws.append([1001, "Gus", "Lee", "Shipping"])
        ws.append([1002, "Hana", "Cho", "Office"])
        wb.save(path)

        members = load_personnel(str(path))

        assert [m.person_id for m in members] == ["1001", "1002"]
        assert members[1].display_name == "Hana Cho"

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "staff.txt"
        path.write_text("x", encoding="utf-8")

        with pytest.raises(ValueError):
            load_personnel(str(path))


class TestFileDirectory:
    """FileDirectory 테스트"""

    @pytest.mark.asyncio
    async def test_fetch_rereads_file(self, tmp_path):
        path = tmp_path / "staff.csv"
        path.write_text("id,first_name\ne1,Dana\n", encoding="utf-8")
        directory = FileDirectory(str(path))

        assert len(await directory.fetch_roster("fire", False)) == 1

        path.write_text("id,first_name\ne1,Dana\ne2,Eli\n", encoding="utf-8")
        assert len(await directory.fetch_roster("fire", False)) == 2

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path):
        directory = FileDirectory(str(tmp_path / "missing.csv"))

        with pytest.raises(FileNotFoundError):
            await directory.fetch_roster("fire", False)


class TestHttpDirectory:
    """HttpDirectory 테스트"""

    def _session(self, payload):
        response = MagicMock()
        response.raise_for_status = Mock()
        response.json = AsyncMock(return_value=payload)
        session = MagicMock()
        session.get.return_value.__aenter__.return_value = response
        return session

    @pytest.mark.asyncio
    async def test_fetch_list_payload(self):
        session = self._session([{"person_id": "e1", "first_name": "Dana", "is_kiosk_user": True}])
        directory = HttpDirectory("http://directory/roster", token="secret", session=session)

        members = await directory.fetch_roster("tornado", True)

        assert members[0].is_kiosk_user is True
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"event_type": "tornado", "drill": "true"}
        assert kwargs["headers"]["Authorization"] == "Bearer secret"

    @pytest.mark.asyncio
    async def test_fetch_wrapped_payload(self):
        session = self._session({"personnel": [{"person_id": "e1", "first_name": "Dana"}]})
        directory = HttpDirectory("http://directory/roster", session=session)

        members = await directory.fetch_roster("fire", False)

        assert [m.person_id for m in members] == ["e1"]
        _, kwargs = session.get.call_args
        assert "Authorization" not in kwargs["headers"]


class TestStaticDirectory:
    """StaticDirectory 테스트"""

    @pytest.mark.asyncio
    async def test_returns_copy(self, roster_abc):
        directory = StaticDirectory(roster_abc)

        roster = await directory.fetch_roster("fire", False)
        roster.clear()

        assert len(await directory.fetch_roster("fire", False)) == 3
