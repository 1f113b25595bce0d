"""
例外定義モジュール

radiko-guideで発生するエラーを分類して提供します。
- 通信エラー（TransportError）
- プロトコル解析エラー（ParseError, RangeError）
- 認証検証エラー（EmptyResponseError, InvalidTokenError）
- 引数エラー（InvalidArgumentError）
- 番組未検出（ProgramNotFoundError）

全ての例外は発生箇所でログ出力された上で呼び出し元へそのまま伝播します。
コア処理はリトライや握りつぶしを行いません。
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional


class ErrorSeverity(Enum):
    """エラー重要度"""
    LOW = "low"           # 想定内の結果
    MEDIUM = "medium"     # 注意が必要なエラー
    HIGH = "high"         # 重要なエラー
    CRITICAL = "critical" # 致命的なエラー


class ErrorCategory(Enum):
    """エラーカテゴリ"""
    AUTHENTICATION = "authentication"     # 認証関連
    NETWORK = "network"                   # ネットワーク関連
    PROTOCOL = "protocol"                 # 応答形式関連
    ARGUMENT = "argument"                 # 呼び出し引数関連
    SCHEDULE = "schedule"                 # 番組表関連
    CONFIGURATION = "configuration"       # 設定関連
    UNKNOWN = "unknown"


# 重要度ごとのログレベル
SEVERITY_LOG_LEVELS = {
    ErrorSeverity.LOW: logging.INFO,
    ErrorSeverity.MEDIUM: logging.WARNING,
    ErrorSeverity.HIGH: logging.ERROR,
    ErrorSeverity.CRITICAL: logging.CRITICAL,
}


class RadikoGuideError(Exception):
    """radiko-guide基底例外クラス"""

    category = ErrorCategory.UNKNOWN
    severity = ErrorSeverity.MEDIUM

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    @property
    def log_level(self) -> int:
        return SEVERITY_LOG_LEVELS[self.severity]


class TransportError(RadikoGuideError):
    """通信エラー（ネットワーク障害・非2xx応答）"""

    category = ErrorCategory.NETWORK

    def __init__(self, message: str, status_code: Optional[int] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message, context)
        self.status_code = status_code


class ParseError(RadikoGuideError):
    """応答ヘッダー・XML・時刻文字列の解析エラー"""

    category = ErrorCategory.PROTOCOL


class RangeError(RadikoGuideError):
    """キーオフセット・キー長が認証キーの範囲外"""

    category = ErrorCategory.PROTOCOL
    severity = ErrorSeverity.HIGH


class AuthenticationError(RadikoGuideError):
    """認証エラー"""

    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.HIGH


class EmptyResponseError(AuthenticationError):
    """auth2の応答が空"""


class InvalidTokenError(AuthenticationError):
    """auth2の応答がエリア判定に失敗（JPで始まらない）"""


class InvalidArgumentError(RadikoGuideError):
    """呼び出し側の引数エラー"""

    category = ErrorCategory.ARGUMENT


class ConfigurationError(RadikoGuideError):
    """設定ファイルエラー"""

    category = ErrorCategory.CONFIGURATION


class ProgramNotFoundError(RadikoGuideError):
    """指定した開始時刻に始まる番組が存在しない

    通常の検索結果として発生しうるため、呼び出し側は
    ``except ProgramNotFoundError`` で分岐してください。
    """

    category = ErrorCategory.SCHEDULE
    severity = ErrorSeverity.LOW

    def __init__(self, station_id: str, start_time: Any):
        super().__init__(
            f"番組が見つかりません: station_id={station_id}, start_time={start_time}",
            {'station_id': station_id, 'start_time': str(start_time)}
        )
        self.station_id = station_id
        self.start_time = start_time
