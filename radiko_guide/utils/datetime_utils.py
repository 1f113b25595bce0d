"""
日時処理ユーティリティ

Radiko APIの時刻表現と datetime の相互変換を提供します。
Radikoの時刻は日本時間（Asia/Tokyo）の "YYYYMMDDhhmmss" 形式です。
"""

from datetime import date, datetime, timedelta

import pytz

from radiko_guide.errors import ParseError


JST = pytz.timezone('Asia/Tokyo')

RADIKO_TIME_FORMAT = '%Y%m%d%H%M%S'
RADIKO_DATE_FORMAT = '%Y%m%d'

# Radikoの放送日は5:00で切り替わる
BROADCAST_DAY_START_HOUR = 5


def parse_radiko_time(time_str: str) -> datetime:
    """Radikoの時刻文字列を日本時間の datetime に変換

    Example:
        parse_radiko_time('20240101050000')
        # datetime(2024, 1, 1, 5, 0, tzinfo=<DstTzInfo 'Asia/Tokyo' JST+9:00:00 STD>)
    """
    try:
        dt = datetime.strptime(time_str, RADIKO_TIME_FORMAT)
    except (TypeError, ValueError) as e:
        raise ParseError(f"時刻の解析に失敗しました: {time_str!r}") from e
    return JST.localize(dt)


def parse_radiko_date(date_str: str) -> date:
    try:
        return datetime.strptime(date_str, RADIKO_DATE_FORMAT).date()
    except (TypeError, ValueError) as e:
        raise ParseError(f"日付の解析に失敗しました: {date_str!r}") from e


def format_radiko_time(dt: datetime) -> str:
    """datetime をRadikoの時刻文字列に変換

    naive な datetime は日本時間とみなします。
    """
    if dt.tzinfo is None:
        dt = JST.localize(dt)
    return dt.astimezone(JST).strftime(RADIKO_TIME_FORMAT)


def broadcast_date(dt: datetime) -> date:
    """時刻が属するRadikoの放送日を返す（0:00〜4:59は前日扱い）"""
    if dt.tzinfo is not None:
        dt = dt.astimezone(JST)
    if dt.hour < BROADCAST_DAY_START_HOUR:
        return (dt - timedelta(days=1)).date()
    return dt.date()
