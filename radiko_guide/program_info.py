"""
番組情報取得モジュール

このモジュールはRadikoの番組情報を取得します。
- 放送局一覧の取得（要認証）
- 週間番組表・日付指定番組表・放送中番組の取得
- 開始時刻による番組の特定

取得結果はキャッシュせず、呼び出しごとに取得します。
"""

from datetime import date, datetime
from typing import List, Optional

from .errors import (
    AuthenticationError,
    InvalidArgumentError,
    ParseError,
    ProgramNotFoundError,
)
from .guide_parser import parse_schedules, parse_station_list
from .models import Program, Station, WeeklySchedule
from .utils.base import LoggerMixin
from .utils.network_utils import RadikoTransport


class ProgramInfoManager(LoggerMixin):
    """番組情報管理クラス"""

    # Radiko API エンドポイント
    STATION_LIST_PATH = "/v3/station/list/{area_id}.xml"
    WEEKLY_PROGRAM_PATH = "/v3/program/station/weekly/{station_id}.xml"
    DATE_PROGRAM_PATH = "/v3/program/date/{date}/{area_id}.xml"
    NOW_PROGRAM_PATH = "/v3/program/now/{area_id}.xml"

    def __init__(self, transport: Optional[RadikoTransport] = None,
                 area_id: Optional[str] = None):
        super().__init__()
        self.transport = transport or RadikoTransport()
        self.area_id = area_id

    def _resolve_area_id(self, area_id: Optional[str]) -> str:
        resolved = area_id or self.area_id
        if not resolved:
            raise InvalidArgumentError("エリアIDが指定されていません")
        return resolved

    def fetch_weekly_schedule(self, station_id: str) -> WeeklySchedule:
        """放送局の週間番組表を取得"""
        if not station_id:
            raise InvalidArgumentError("放送局IDが指定されていません")

        self.logger.info(f"週間番組表を取得中: station_id={station_id}")

        path = self.WEEKLY_PROGRAM_PATH.format(station_id=station_id)
        response = self.transport.request('GET', path)
        schedules = parse_schedules(response.content)

        for schedule in schedules:
            if schedule.station_id == station_id:
                self.logger.info(f"週間番組表取得完了: {schedule.program_count}番組")
                return schedule

        self.logger.error(f"番組表に放送局が含まれていません: {station_id}")
        raise ParseError(f"番組表に放送局 {station_id} が含まれていません")

    def find_program_by_start_time(self, station_id: str, start_time: datetime) -> Program:
        """開始時刻が一致する番組を取得

        週間番組表の全番組を放送順に走査し、開始時刻が start_time と
        同一時点の最初の番組を返します。時刻帯の正規化は行いません。

        Args:
            station_id: 放送局ID
            start_time: 番組の開始時刻

        Raises:
            InvalidArgumentError: 放送局IDが空、または start_time が datetime でない
            ProgramNotFoundError: 該当する番組がない
        """
        if not station_id:
            raise InvalidArgumentError("放送局IDが指定されていません")
        if not isinstance(start_time, datetime):
            raise InvalidArgumentError(f"開始時刻が不正です: {start_time!r}")

        schedule = self.fetch_weekly_schedule(station_id)

        for program in schedule.iter_programs():
            if program.start_time == start_time:
                self.logger.info(f"番組を特定: {program.title} ({program.id})")
                return program

        self.logger.info(f"番組が見つかりません: station_id={station_id}, start_time={start_time}")
        raise ProgramNotFoundError(station_id, start_time)

    def fetch_station_list(self, area_id: Optional[str] = None) -> List[Station]:
        """放送局一覧を取得（認証済みトランスポートが必要）"""
        if not self.transport.auth_token:
            raise AuthenticationError("放送局一覧の取得には認証が必要です")

        area_id = self._resolve_area_id(area_id)
        self.logger.info(f"放送局一覧を取得中: area_id={area_id}")

        response = self.transport.request('GET', self.STATION_LIST_PATH.format(area_id=area_id))
        stations = parse_station_list(response.content)

        self.logger.info(f"放送局一覧取得完了: {len(stations)}局")
        return stations

    def fetch_program_guide(self, target_date: date,
                            area_id: Optional[str] = None) -> List[WeeklySchedule]:
        """エリア内全放送局の指定放送日の番組表を取得"""
        area_id = self._resolve_area_id(area_id)
        date_str = target_date.strftime('%Y%m%d')
        self.logger.info(f"番組表を取得中: {date_str}, area_id={area_id}")

        path = self.DATE_PROGRAM_PATH.format(date=date_str, area_id=area_id)
        response = self.transport.request('GET', path)
        return parse_schedules(response.content)

    def fetch_now_programs(self, area_id: Optional[str] = None) -> List[WeeklySchedule]:
        """エリア内全放送局の放送中番組を取得"""
        area_id = self._resolve_area_id(area_id)
        self.logger.info(f"放送中番組を取得中: area_id={area_id}")

        response = self.transport.request('GET', self.NOW_PROGRAM_PATH.format(area_id=area_id))
        return parse_schedules(response.content)
