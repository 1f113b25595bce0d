"""
番組表XML解析モジュール

Radiko API（v3）のXML応答をデータモデルに変換します。
- 放送局一覧（station/list/{area_id}.xml）
- 番組表（program/station/weekly, program/date, program/now）
"""

import xml.etree.ElementTree as ET
from typing import List, Optional

from .errors import ParseError
from .models import DailySchedule, Program, Station, WeeklySchedule
from .utils.datetime_utils import broadcast_date, parse_radiko_date, parse_radiko_time


def _parse_xml(content: bytes) -> ET.Element:
    try:
        return ET.fromstring(content)
    except ET.ParseError as e:
        raise ParseError(f"XML解析エラー: {e}") from e


def _get_element_text(parent: ET.Element, tag_name: str) -> str:
    """子要素のテキストを取得（存在しなければ空文字）"""
    elem = parent.find(tag_name)
    if elem is None or elem.text is None:
        return ""
    return elem.text.strip()


def parse_station_list(content: bytes) -> List[Station]:
    """放送局一覧XMLを解析

    Args:
        content: station/list/{area_id}.xml の応答本文

    Returns:
        List[Station]: 放送局リスト（XMLの記載順）
    """
    root = _parse_xml(content)
    area_id = root.get('area_id', '')

    stations = []
    for station_elem in root.iter('station'):
        station_id = _get_element_text(station_elem, 'id')
        if not station_id:
            continue
        stations.append(Station(
            id=station_id,
            name=_get_element_text(station_elem, 'name'),
            ascii_name=_get_element_text(station_elem, 'ascii_name'),
            area_id=area_id,
            logo_url=_get_element_text(station_elem, 'logo'),
            banner_url=_get_element_text(station_elem, 'banner'),
        ))
    return stations


def parse_program_element(prog_elem: ET.Element, station_id: str) -> Program:
    """<prog> 要素を Program に変換"""
    start_time_str = prog_elem.get('ft')
    end_time_str = prog_elem.get('to')
    if not start_time_str or not end_time_str:
        raise ParseError(f"番組の開始・終了時刻がありません (station={station_id})")

    start_time = parse_radiko_time(start_time_str)
    end_time = parse_radiko_time(end_time_str)

    # 出演者はカンマ区切り
    performers = [p.strip() for p in _get_element_text(prog_elem, 'pfm').split(',') if p.strip()]

    genre = ""
    genre_elem = prog_elem.find('genre')
    if genre_elem is not None:
        genre = _get_element_text(genre_elem, 'program')

    dur = prog_elem.get('dur')
    duration = int(dur) // 60 if dur and dur.isdigit() else 0

    return Program(
        id=prog_elem.get('id') or f"{station_id}_{start_time_str}",
        station_id=station_id,
        title=_get_element_text(prog_elem, 'title'),
        start_time=start_time,
        end_time=end_time,
        duration=duration,
        description=_get_element_text(prog_elem, 'desc'),
        info=_get_element_text(prog_elem, 'info'),
        performers=performers,
        url=_get_element_text(prog_elem, 'url'),
        image_url=_get_element_text(prog_elem, 'img'),
        genre=genre,
    )


def _parse_daily_schedule(progs_elem: ET.Element, station_id: str) -> Optional[DailySchedule]:
    programs = [
        parse_program_element(prog_elem, station_id)
        for prog_elem in progs_elem.findall('prog')
    ]

    date_str = _get_element_text(progs_elem, 'date')
    if date_str:
        day = parse_radiko_date(date_str)
    elif programs:
        day = broadcast_date(programs[0].start_time)
    else:
        return None

    return DailySchedule(station_id=station_id, date=day, programs=programs)


def parse_schedules(content: bytes) -> List[WeeklySchedule]:
    """番組表XMLを解析

    放送局ごとに日別番組表を記載順に保持した WeeklySchedule を返します。

    Args:
        content: program/station/weekly, program/date, program/now の応答本文

    Raises:
        ParseError: XMLまたは時刻の形式が不正
    """
    root = _parse_xml(content)

    schedules = []
    for station_elem in root.iter('station'):
        station_id = station_elem.get('id', '')
        if not station_id:
            continue

        station = Station(id=station_id, name=_get_element_text(station_elem, 'name'))
        days = []
        for progs_elem in station_elem.findall('progs'):
            daily = _parse_daily_schedule(progs_elem, station_id)
            if daily is not None:
                days.append(daily)

        schedules.append(WeeklySchedule(station=station, days=days))

    return schedules
