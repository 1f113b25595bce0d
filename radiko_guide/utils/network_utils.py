"""
ネットワーク処理ユーティリティ

Radiko APIへのHTTP通信を担うトランスポートを提供します。
- 標準ヘッダー付きセッションの作成
- URL組み立て・タイムアウト設定
- 通信失敗・非2xx応答の TransportError への変換
"""

from typing import Dict, Optional

import requests

from radiko_guide.errors import TransportError
from radiko_guide.utils.base import LoggerMixin


DEFAULT_BASE_URL = "https://radiko.jp"
DEFAULT_TIMEOUT = 30

AUTH_TOKEN_HEADER = 'X-Radiko-AuthToken'


def create_radiko_session(
    timeout: int = DEFAULT_TIMEOUT,
    additional_headers: Optional[Dict[str, str]] = None
) -> requests.Session:
    """Radiko API用の標準セッションを作成

    Args:
        timeout: リクエストタイムアウト秒数（デフォルト: 30秒）
        additional_headers: 追加ヘッダー辞書

    Returns:
        requests.Session: 設定済みセッション

    Example:
        session = create_radiko_session(
            timeout=60,
            additional_headers={'X-Custom': 'value'}
        )
    """
    session = requests.Session()
    session.timeout = timeout

    standard_headers = {
        'User-Agent': 'radiko-guide/1.0',
        'Accept': '*/*',
        'Accept-Language': 'ja,en;q=0.9',
        'Connection': 'keep-alive'
    }

    if additional_headers:
        standard_headers.update(additional_headers)

    session.headers.update(standard_headers)
    return session


class RadikoTransport(LoggerMixin):
    """Radiko APIへのリクエスト送受信を行うクラス

    1リクエスト＝1往復の同期通信のみを行い、リトライはしません。
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL,
                 timeout: int = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        super().__init__()
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or create_radiko_session(timeout=timeout)

    def build_url(self, path: str) -> str:
        """APIパスから絶対URLを組み立て"""
        if path.startswith(('http://', 'https://')):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str,
                headers: Optional[Dict[str, str]] = None,
                params: Optional[Dict[str, str]] = None) -> requests.Response:
        """リクエストを送信し応答を返す

        Args:
            method: HTTPメソッド
            path: APIパス（または絶対URL）
            headers: リクエストヘッダー
            params: クエリパラメータ

        Returns:
            requests.Response: 2xx応答

        Raises:
            TransportError: 通信失敗または非2xx応答
        """
        url = self.build_url(path)
        self.logger.debug(f"リクエスト送信: {method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.error(f"通信エラー: {method} {url} - {e}")
            raise TransportError(f"通信に失敗しました: {e}", context={'url': url}) from e

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            self.logger.error(f"HTTPエラー: {method} {url} - {response.status_code}")
            raise TransportError(
                f"HTTPエラー応答: {response.status_code}",
                status_code=response.status_code,
                context={'url': url}
            ) from e

        return response

    def set_auth_token(self, auth_token: str) -> None:
        """以降の全リクエストに認証トークンを付与"""
        self.session.headers[AUTH_TOKEN_HEADER] = auth_token

    def clear_auth_token(self) -> None:
        self.session.headers.pop(AUTH_TOKEN_HEADER, None)

    @property
    def auth_token(self) -> Optional[str]:
        return self.session.headers.get(AUTH_TOKEN_HEADER)

    def close(self) -> None:
        self.session.close()
