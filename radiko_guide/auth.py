"""
Radiko認証モジュール

このモジュールはRadikoサービスへのエリア認証（auth1/auth2）を行います。
- auth1: 認証トークンとキーオフセット・キー長の取得
- 部分キー（パーシャルキー）の生成
- auth2: 部分キーの送信とエリア判定結果の取得
- 判定結果の検証と認証トークンの登録

処理は auth1 → 部分キー生成 → auth2 → 検証 の一直線で、
いずれかで失敗した時点でその例外をそのまま送出します。
"""

import base64
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import (
    AuthenticationError,
    EmptyResponseError,
    InvalidTokenError,
    ParseError,
    RangeError,
)
from .utils.base import LoggerMixin
from .utils.network_utils import AUTH_TOKEN_HEADER, RadikoTransport


# Radiko認証キー（固定値）
AUTH_KEY = "bcd151073c03b352e1ef2fd66c32209da9ca0afa"

AUTH1_PATH = "/v2/api/auth1"
AUTH2_PATH = "/v2/api/auth2"

KEY_LENGTH_HEADER = 'X-Radiko-KeyLength'
KEY_OFFSET_HEADER = 'X-Radiko-KeyOffset'
PARTIAL_KEY_HEADER = 'X-Radiko-Partialkey'

# 認証リクエストに毎回付与するクライアント識別ヘッダー
IDENTITY_HEADERS = {
    'X-Radiko-App': 'pc_html5',
    'X-Radiko-App-Version': '0.0.1',
    'X-Radiko-User': 'dummy_user',
    'X-Radiko-Device': 'pc',
}

AREA_PREFIX = "JP"


@dataclass(frozen=True)
class AuthChallenge:
    """auth1の応答から得られるチャレンジ情報"""
    auth_token: str
    key_length: int
    key_offset: int


@dataclass
class AuthInfo:
    """認証情報を保持するデータクラス"""
    auth_token: str
    area_id: str


def generate_partial_key(offset: int, length: int) -> str:
    """部分キーを生成

    認証キーの offset 文字目から length 文字を切り出し、base64エンコードします。

    Raises:
        RangeError: offset/length が認証キーの範囲外
    """
    if offset < 0 or length < 0 or offset + length > len(AUTH_KEY):
        raise RangeError(
            f"キー範囲が不正です: offset={offset}, length={length}, key_size={len(AUTH_KEY)}",
            {'offset': offset, 'length': length}
        )
    partial_key = AUTH_KEY[offset:offset + length].encode('ascii')
    return base64.b64encode(partial_key).decode('ascii')


def verify_auth2_response(parts: List[str]) -> str:
    """auth2の応答を検証し、エリアIDを返す

    Raises:
        EmptyResponseError: 応答が空
        InvalidTokenError: 先頭要素が "JP" で始まらない
    """
    if not parts:
        raise EmptyResponseError("auth2の応答が空です")

    area_id = parts[0].strip()
    if not area_id.startswith(AREA_PREFIX):
        raise InvalidTokenError(f"無効なトークンです: {area_id}", {'area_id': area_id})

    return area_id


def _parse_int_header(headers, name: str) -> int:
    value = headers.get(name)
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ParseError(f"ヘッダー {name} が整数ではありません: {value!r}") from e


class RadikoAuthenticator(LoggerMixin):
    """Radiko認証を管理するクラス"""

    def __init__(self, transport: Optional[RadikoTransport] = None):
        super().__init__()
        self.transport = transport or RadikoTransport()
        self.auth_info: Optional[AuthInfo] = None

    def _identity_headers(self, **extra: str) -> Dict[str, str]:
        headers = dict(IDENTITY_HEADERS)
        headers.update(extra)
        return headers

    def auth1(self) -> AuthChallenge:
        """auth1: 認証トークンとキー情報を取得"""
        self.logger.info("auth1リクエスト開始")

        response = self.transport.request('GET', AUTH1_PATH, headers=self._identity_headers())

        auth_token = response.headers.get(AUTH_TOKEN_HEADER)
        if not auth_token:
            self.logger.error("auth1応答に認証トークンがありません")
            raise ParseError("認証トークンが取得できませんでした")

        try:
            key_length = _parse_int_header(response.headers, KEY_LENGTH_HEADER)
            key_offset = _parse_int_header(response.headers, KEY_OFFSET_HEADER)
        except ParseError as e:
            self.logger.error(f"auth1応答の解析エラー: {e}")
            raise

        self.logger.debug(f"auth1完了: length={key_length}, offset={key_offset}")
        return AuthChallenge(auth_token=auth_token, key_length=key_length, key_offset=key_offset)

    def auth2(self, auth_token: str, partial_key: str) -> List[str]:
        """auth2: 部分キーを送信し、応答本文をカンマ区切りで返す

        空の本文は空リストとして返します。
        """
        self.logger.info("auth2リクエスト開始")

        headers = self._identity_headers(**{
            AUTH_TOKEN_HEADER: auth_token,
            PARTIAL_KEY_HEADER: partial_key,
        })
        response = self.transport.request('GET', AUTH2_PATH, headers=headers)

        try:
            text = response.content.decode('utf-8')
        except UnicodeDecodeError as e:
            self.logger.error(f"auth2応答のデコードエラー: {e}")
            raise ParseError("auth2の応答がUTF-8ではありません") from e

        if not text.strip():
            return []
        return text.split(',')

    def authorize_token(self) -> str:
        """エリア認証を実行し、有効化された認証トークンを返す

        成功時はトランスポートのセッションヘッダーに認証トークンを設定します。

        Raises:
            TransportError, ParseError, RangeError,
            EmptyResponseError, InvalidTokenError
        """
        challenge = self.auth1()

        try:
            partial_key = generate_partial_key(challenge.key_offset, challenge.key_length)
        except RangeError as e:
            self.logger.error(f"部分キー生成エラー: {e}")
            raise

        parts = self.auth2(challenge.auth_token, partial_key)

        try:
            area_id = verify_auth2_response(parts)
        except AuthenticationError as e:
            self.logger.error(f"auth2検証エラー: {e}")
            raise

        self.auth_info = AuthInfo(auth_token=challenge.auth_token, area_id=area_id)
        self.transport.set_auth_token(challenge.auth_token)

        self.logger.info(f"認証完了: area_id={area_id}")
        return challenge.auth_token

    def is_authenticated(self) -> bool:
        """認証済みかどうかをチェック"""
        return self.auth_info is not None

    @property
    def area_id(self) -> Optional[str]:
        return self.auth_info.area_id if self.auth_info else None

    def logout(self):
        """認証情報をクリア"""
        self.auth_info = None
        self.transport.clear_auth_token()
        self.logger.info("認証情報をクリアしました")
