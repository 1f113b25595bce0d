"""
番組表データモデル

放送局・番組・日別番組表・週間番組表を表すデータクラスです。
いずれも取得時点のスナップショットで、取得後に変更されることはありません。
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Any, Dict, Iterator, List


@dataclass
class Station:
    """放送局情報"""
    id: str
    name: str
    ascii_name: str = ""
    area_id: str = ""
    logo_url: str = ""
    banner_url: str = ""


@dataclass
class Program:
    """番組情報"""
    id: str
    station_id: str
    title: str
    start_time: datetime  # timezone-aware (Asia/Tokyo)
    end_time: datetime
    duration: int = 0  # 分単位
    description: str = ""
    info: str = ""
    performers: List[str] = field(default_factory=list)
    url: str = ""
    image_url: str = ""
    genre: str = ""

    def __post_init__(self):
        if not self.duration:
            self.duration = int((self.end_time - self.start_time).total_seconds() / 60)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['start_time'] = self.start_time.isoformat()
        data['end_time'] = self.end_time.isoformat()
        return data


@dataclass
class DailySchedule:
    """1放送日分の番組表"""
    station_id: str
    date: date
    programs: List[Program] = field(default_factory=list)


@dataclass
class WeeklySchedule:
    """放送局の番組表（日別番組表を日付順に保持）"""
    station: Station
    days: List[DailySchedule] = field(default_factory=list)

    @property
    def station_id(self) -> str:
        return self.station.id

    def iter_programs(self) -> Iterator[Program]:
        """全日の番組を日付順・放送順に列挙"""
        for day in self.days:
            yield from day.programs

    @property
    def program_count(self) -> int:
        return sum(len(day.programs) for day in self.days)
