"""
RadikoGuideCLI テスト

コンポーネントをモック注入したコマンド単体の確認と、
HTTP応答のみを差し替えた実コンポーネントでの結合確認を行います。
"""

import io
import json
import logging
import unittest
from contextlib import redirect_stderr, redirect_stdout
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

from radiko_guide.cli import EXIT_ERROR, EXIT_NOT_FOUND, EXIT_OK, RadikoGuideCLI, parse_start_time
from radiko_guide.errors import (
    InvalidArgumentError,
    InvalidTokenError,
    ParseError,
    ProgramNotFoundError,
)
from radiko_guide.models import Program, Station
from radiko_guide.utils.datetime_utils import JST
from tests.utils.test_environment import (
    STATION_LIST_XML,
    WEEKLY_PROGRAMS_XML,
    TemporaryTestEnvironment,
    auth1_response,
    auth2_response,
    make_response,
)


def _sample_program() -> Program:
    return Program(
        id="LFR_2",
        station_id="LFR",
        title="オールナイトニッポン",
        start_time=JST.localize(datetime(2024, 1, 2, 1, 0, 0)),
        end_time=JST.localize(datetime(2024, 1, 2, 3, 0, 0)),
        performers=["パーソナリティ"],
    )


class TestParseStartTime(unittest.TestCase):
    """開始時刻引数の解析テスト"""

    def test_01_Radiko形式は日本時間(self):
        self.assertEqual(parse_start_time("20240102010000"), JST.localize(datetime(2024, 1, 2, 1, 0, 0)))

    def test_02_オフセット付きISO形式(self):
        self.assertEqual(
            parse_start_time("2024-01-01T16:00:00+00:00"),
            datetime(2024, 1, 1, 16, 0, 0, tzinfo=timezone.utc)
        )

    def test_03_オフセットなしISO形式は日本時間(self):
        dt = parse_start_time("2024-01-02T01:00:00")
        self.assertEqual(dt.utcoffset(), timedelta(hours=9))

    def test_04_不正な形式(self):
        with self.assertRaises(ParseError):
            parse_start_time("2024")
        with self.assertRaises(InvalidArgumentError):
            parse_start_time("yesterday")


    def test_05_末尾ZのISO形式はUTC(self):
        """
        Given: 末尾が "Z" のISO 8601文字列
        When: 解析
        Then: UTCのaware datetimeになり、日本時間1:00と同一時点
        """
        dt = parse_start_time("2024-01-01T16:00:00Z")

        self.assertEqual(dt.utcoffset(), timedelta(0))
        self.assertEqual(dt, JST.localize(datetime(2024, 1, 2, 1, 0, 0)))


class TestCLICommands(unittest.TestCase):
    """モック注入によるコマンドテスト"""

    def setUp(self):
        self.temp_env = TemporaryTestEnvironment().__enter__()
        self.config_args = ['--config', str(self.temp_env.config_file)]
        self.authenticator = MagicMock()
        self.manager = MagicMock()
        self.cli = RadikoGuideCLI(
            authenticator=self.authenticator,
            program_info_manager=self.manager
        )

    def tearDown(self):
        self.temp_env.__exit__(None, None, None)

    def _run(self, *args):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = self.cli.run(self.config_args + list(args))
        return code, out.getvalue(), err.getvalue()

    def test_01_findコマンド成功(self):
        self.manager.find_program_by_start_time.return_value = _sample_program()

        code, out, _ = self._run('find', 'LFR', '20240102010000')

        self.assertEqual(code, EXIT_OK)
        self.assertIn("オールナイトニッポン", out)
        self.manager.find_program_by_start_time.assert_called_once_with(
            'LFR', JST.localize(datetime(2024, 1, 2, 1, 0, 0))
        )
        self.authenticator.authorize_token.assert_not_called()

    def test_02_findで未検出なら終了コード2(self):
        start = JST.localize(datetime(2024, 1, 2, 1, 1, 0))
        self.manager.find_program_by_start_time.side_effect = ProgramNotFoundError('LFR', start)

        code, out, _ = self._run('find', 'LFR', '20240102010100')

        self.assertEqual(code, EXIT_NOT_FOUND)
        self.assertIn("番組が見つかりません", out)

    def test_03_不正な開始時刻は終了コード1(self):
        code, _, err = self._run('find', 'LFR', '2024-13-45T99:00')

        self.assertEqual(code, EXIT_ERROR)
        self.assertIn("エラー", err)

    def test_04_authコマンド(self):
        self.authenticator.authorize_token.return_value = "token"
        self.authenticator.area_id = "JP13"

        code, out, _ = self._run('auth')

        self.assertEqual(code, EXIT_OK)
        self.assertIn("area_id=JP13", out)

    def test_05_認証失敗は終了コード1(self):
        self.authenticator.authorize_token.side_effect = InvalidTokenError("無効なトークンです: US99")

        code, _, err = self._run('stations')

        self.assertEqual(code, EXIT_ERROR)
        self.assertIn("US99", err)
        self.manager.fetch_station_list.assert_not_called()

    def test_06_stationsコマンド(self):
        self.manager.fetch_station_list.return_value = [Station(id="TBS", name="TBSラジオ")]

        code, out, _ = self._run('stations', '--area', 'JP13')

        self.assertEqual(code, EXIT_OK)
        self.assertIn("TBSラジオ", out)
        self.authenticator.authorize_token.assert_called_once()
        self.manager.fetch_station_list.assert_called_once_with('JP13')

    def test_07_エラーは重要度に応じたレベルでログ出力(self):
        """
        Given: 重要度HIGHの認証エラーと重要度LOWの番組未検出
        When: それぞれのコマンドを実行
        Then: 前者はERROR、後者はINFOでカテゴリ付きのログが出る
        """
        self.authenticator.authorize_token.side_effect = InvalidTokenError("無効なトークンです: US99")
        with self.assertLogs('radiko_guide.cli', level='INFO') as logs:
            self._run('auth')
        self.assertEqual(logs.records[-1].levelno, logging.ERROR)
        self.assertIn("[authentication] InvalidTokenError", logs.records[-1].getMessage())

        start = JST.localize(datetime(2024, 1, 2, 1, 1, 0))
        self.manager.find_program_by_start_time.side_effect = ProgramNotFoundError('LFR', start)
        with self.assertLogs('radiko_guide.cli', level='INFO') as logs:
            self._run('find', 'LFR', '20240102010100')
        self.assertEqual(logs.records[-1].levelno, logging.INFO)
        self.assertIn("[schedule] ProgramNotFoundError", logs.records[-1].getMessage())

    def test_08_末尾ZのISO形式で検索(self):
        self.manager.find_program_by_start_time.return_value = _sample_program()

        code, _, _ = self._run('find', 'LFR', '2024-01-01T16:00:00Z')

        self.assertEqual(code, EXIT_OK)
        self.manager.find_program_by_start_time.assert_called_once_with(
            'LFR', datetime(2024, 1, 1, 16, 0, 0, tzinfo=timezone.utc)
        )


class TestCLIIntegration(unittest.TestCase):
    """実コンポーネントでの結合テスト（HTTP応答のみ差し替え）"""

    def setUp(self):
        self.temp_env = TemporaryTestEnvironment().__enter__()
        self.temp_env.write_config({"timeout": 5})

    def tearDown(self):
        self.temp_env.__exit__(None, None, None)

    def _run(self, *args):
        out = io.StringIO()
        with redirect_stdout(out), redirect_stderr(io.StringIO()):
            code = RadikoGuideCLI().run(['--config', str(self.temp_env.config_file)] + list(args))
        return code, out.getvalue()

    @patch('requests.Session.request')
    def test_01_findで番組の終了時刻を表示(self, mock_request):
        mock_request.return_value = make_response(content=WEEKLY_PROGRAMS_XML)

        code, out = self._run('find', 'LFR', '2024-01-01T16:00:00+00:00')

        self.assertEqual(code, EXIT_OK)
        self.assertIn("番組ID: LFR_2", out)
        self.assertIn("終了時刻: 2024-01-02T03:00:00+09:00", out)
        self.assertEqual(mock_request.call_args[1]['timeout'], 5)

    @patch('requests.Session.request')
    def test_03_findのJSON出力(self, mock_request):
        mock_request.return_value = make_response(content=WEEKLY_PROGRAMS_XML)

        code, out = self._run('find', 'LFR', '20240102010000', '--json')

        self.assertEqual(code, EXIT_OK)
        data = json.loads(out)
        self.assertEqual(data['id'], "LFR_2")
        self.assertEqual(data['start_time'], "2024-01-02T01:00:00+09:00")
        self.assertEqual(data['end_time'], "2024-01-02T03:00:00+09:00")
        self.assertEqual(data['performers'], ["パーソナリティ"])

    @patch('requests.Session.request')
    def test_02_認証後に認証エリアの放送局一覧を取得(self, mock_request):
        mock_request.side_effect = [
            auth1_response("token", "16", "8"),
            auth2_response("JP13,tokyo Japan"),
            make_response(content=STATION_LIST_XML),
        ]

        code, out = self._run('stations')

        self.assertEqual(code, EXIT_OK)
        self.assertIn("放送局一覧 (2 局)", out)
        self.assertEqual(mock_request.call_args_list[2][0][1], "https://radiko.jp/v3/station/list/JP13.xml")


if __name__ == "__main__":
    unittest.main()
