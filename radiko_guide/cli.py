"""
CLIインターフェースモジュール

radiko-guideのコマンドライン操作を提供します。
- auth: エリア認証の実行
- stations: 放送局一覧表示
- weekly: 週間番組表表示
- now: 放送中番組表示
- find: 開始時刻による番組検索
"""

import argparse
import json
import sys
from datetime import datetime
from typing import Any, Dict, List, Optional

from .auth import RadikoAuthenticator
from .errors import InvalidArgumentError, ProgramNotFoundError, RadikoGuideError
from .logging_config import setup_logging
from .models import Program
from .program_info import ProgramInfoManager
from .utils.base import LoggerMixin
from .utils.config_utils import ConfigManager
from .utils.datetime_utils import JST, parse_radiko_time
from .utils.network_utils import RadikoTransport


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def parse_start_time(value: str) -> datetime:
    """コマンドラインの開始時刻を解析

    "YYYYMMDDhhmmss"（日本時間）またはISO 8601形式（末尾 "Z" 可）を受け付けます。
    タイムゾーン指定のないISO形式は日本時間とみなします。
    """
    if value.isdigit():
        return parse_radiko_time(value)

    # fromisoformat は Python 3.11 未満で末尾の "Z" を受け付けない
    if value.endswith(('Z', 'z')):
        value = value[:-1] + '+00:00'

    try:
        dt = datetime.fromisoformat(value)
    except ValueError as e:
        raise InvalidArgumentError(f"開始時刻の形式が不正です: {value}") from e

    if dt.tzinfo is None:
        dt = JST.localize(dt)
    return dt


def format_program(program: Program) -> str:
    start_str = program.start_time.strftime('%Y-%m-%d %H:%M')
    end_str = program.end_time.strftime('%H:%M')
    line = f"{start_str}-{end_str} {program.title}"
    if program.performers:
        line += f"  出演: {', '.join(program.performers)}"
    return line


class RadikoGuideCLI(LoggerMixin):
    """radiko-guide CLIメインクラス"""

    VERSION = "1.0.0"

    def __init__(self,
                 config_path: str = "config.json",
                 authenticator: Optional[RadikoAuthenticator] = None,
                 program_info_manager: Optional[ProgramInfoManager] = None):
        super().__init__()
        self.config_path = config_path
        self.config: Dict[str, Any] = {}

        # 依存性注入対応（テスト時はモックを注入）
        self.authenticator = authenticator
        self.program_info_manager = program_info_manager

    def create_parser(self) -> argparse.ArgumentParser:
        """コマンドライン引数パーサーを作成"""
        parser = argparse.ArgumentParser(
            prog='radiko-guide',
            description='Radikoのエリア認証と番組表検索を行うツール',
        )
        parser.add_argument('--version', action='version', version=f'radiko-guide {self.VERSION}')
        parser.add_argument('--config', help='設定ファイルパス', default=self.config_path)
        parser.add_argument('--verbose', '-v', action='store_true', help='詳細ログを表示')

        subparsers = parser.add_subparsers(dest='command', required=True)

        subparsers.add_parser('auth', help='エリア認証を実行')

        stations = subparsers.add_parser('stations', help='放送局一覧を表示（要認証）')
        stations.add_argument('--area', help='エリアID（例: JP13）')

        now = subparsers.add_parser('now', help='放送中の番組を表示')
        now.add_argument('--area', help='エリアID（例: JP13）')

        weekly = subparsers.add_parser('weekly', help='週間番組表を表示')
        weekly.add_argument('station_id', help='放送局ID（例: LFR）')

        find = subparsers.add_parser('find', help='開始時刻で番組を検索')
        find.add_argument('station_id', help='放送局ID（例: LFR）')
        find.add_argument('start', help='開始時刻（YYYYMMDDhhmmss または ISO 8601）')
        find.add_argument('--json', action='store_true', help='JSON形式で出力')

        return parser

    def _setup_logging(self, verbose: bool = False):
        setup_logging(
            log_level='DEBUG' if verbose else self.config.get('log_level', 'INFO'),
            log_file=self.config.get('log_file'),
            console_output=verbose,
            max_log_size=self.config.get('max_log_size_mb', 10) * 1024 * 1024
        )

    def _initialize_components(self):
        """未注入のコンポーネントを設定から生成"""
        if self.authenticator and self.program_info_manager:
            return

        transport = RadikoTransport(
            base_url=self.config['base_url'],
            timeout=self.config['timeout']
        )
        if not self.authenticator:
            self.authenticator = RadikoAuthenticator(transport)
        if not self.program_info_manager:
            self.program_info_manager = ProgramInfoManager(
                self.authenticator.transport,
                area_id=self.config.get('area_id') or None
            )

    def run(self, args: Optional[List[str]] = None) -> int:
        """CLIメインエントリーポイント"""
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)

        try:
            self.config = ConfigManager(parsed_args.config).load_config()
            self._setup_logging(parsed_args.verbose)
            self._initialize_components()

            handler = getattr(self, f"_cmd_{parsed_args.command}")
            return handler(parsed_args)

        except ProgramNotFoundError as e:
            self._log_error(e)
            print(f"番組が見つかりません: {e.station_id} {e.start_time}")
            return EXIT_NOT_FOUND
        except RadikoGuideError as e:
            self._log_error(e)
            print(f"エラー: {e}", file=sys.stderr)
            return EXIT_ERROR
        finally:
            if self.authenticator:
                self.authenticator.transport.close()

    def _log_error(self, error: RadikoGuideError):
        """エラーの重要度に応じたレベルでログ出力"""
        self.logger.log(
            error.log_level,
            f"[{error.category.value}] {type(error).__name__}: {error}"
        )

    def _authorize(self) -> str:
        auth_token = self.authenticator.authorize_token()
        if not self.program_info_manager.area_id:
            self.program_info_manager.area_id = self.authenticator.area_id
        return auth_token

    def _cmd_auth(self, args) -> int:
        """認証コマンド"""
        self._authorize()
        print(f"認証成功: area_id={self.authenticator.area_id}")
        return EXIT_OK

    def _cmd_stations(self, args) -> int:
        """放送局一覧コマンド"""
        self._authorize()
        stations = self.program_info_manager.fetch_station_list(args.area)

        print(f"放送局一覧 ({len(stations)} 局)")
        print("-" * 50)
        for station in stations:
            print(f"{station.id:10} {station.name}")
        return EXIT_OK

    def _cmd_now(self, args) -> int:
        """放送中番組コマンド"""
        self._authorize()
        schedules = self.program_info_manager.fetch_now_programs(args.area)

        for schedule in schedules:
            for program in schedule.iter_programs():
                print(f"{schedule.station_id:10} {format_program(program)}")
        return EXIT_OK

    def _cmd_weekly(self, args) -> int:
        """週間番組表コマンド"""
        schedule = self.program_info_manager.fetch_weekly_schedule(args.station_id)

        for day in schedule.days:
            print(f"{args.station_id} 番組表 ({day.date.isoformat()})")
            print("-" * 70)
            for program in day.programs:
                print(format_program(program))
            print()
        return EXIT_OK

    def _cmd_find(self, args) -> int:
        """番組検索コマンド"""
        start_time = parse_start_time(args.start)
        program = self.program_info_manager.find_program_by_start_time(args.station_id, start_time)

        if args.json:
            print(json.dumps(program.to_dict(), ensure_ascii=False, indent=2))
            return EXIT_OK

        print(format_program(program))
        print(f"番組ID: {program.id}")
        print(f"終了時刻: {program.end_time.isoformat()}")
        return EXIT_OK


def main():
    """メインエントリーポイント"""
    cli = RadikoGuideCLI()
    try:
        sys.exit(cli.run())
    except KeyboardInterrupt:
        print("\n操作がキャンセルされました")
        sys.exit(EXIT_ERROR)


if __name__ == "__main__":
    main()
