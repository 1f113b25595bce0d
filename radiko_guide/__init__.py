"""
radiko-guide - Radikoのエリア認証と番組表検索を行うクライアント

主要コンポーネント:
- auth: エリア認証（auth1/auth2）
- program_info: 番組表の取得と開始時刻による番組特定
- guide_parser: 番組表XMLの解析
- errors: 例外定義
- cli: コマンドライン操作
"""

__version__ = "1.0.0"
__license__ = "MIT"

from .auth import AUTH_KEY, AuthChallenge, AuthInfo, RadikoAuthenticator, generate_partial_key
from .errors import (
    AuthenticationError,
    EmptyResponseError,
    InvalidArgumentError,
    InvalidTokenError,
    ParseError,
    ProgramNotFoundError,
    RadikoGuideError,
    RangeError,
    TransportError,
)
from .models import DailySchedule, Program, Station, WeeklySchedule
from .program_info import ProgramInfoManager
from .utils.network_utils import RadikoTransport

__all__ = [
    # 認証関連
    'AUTH_KEY',
    'AuthChallenge',
    'AuthInfo',
    'RadikoAuthenticator',
    'generate_partial_key',

    # 番組情報関連
    'ProgramInfoManager',
    'Station',
    'Program',
    'DailySchedule',
    'WeeklySchedule',

    # 通信
    'RadikoTransport',

    # 例外
    'RadikoGuideError',
    'TransportError',
    'ParseError',
    'RangeError',
    'AuthenticationError',
    'EmptyResponseError',
    'InvalidTokenError',
    'InvalidArgumentError',
    'ProgramNotFoundError',
]
