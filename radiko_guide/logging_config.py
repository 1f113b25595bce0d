"""
ログ設定モジュール

radiko-guide全体のログ設定を統一管理します。
- 通常使用時：ローテーション付きファイル出力（--verbose 時はコンソールにも出力）
- テスト時：ERROR以上のみ、ファイル出力なし
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional, Union


class RadikoGuideLogConfig:
    """radiko-guideのログ設定管理クラス"""

    DEFAULT_LOG_LEVEL = logging.INFO
    DEFAULT_LOG_FILE = "radiko_guide.log"
    DEFAULT_MAX_LOG_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    def __init__(self):
        self._initialized = False
        self._is_test_mode = (
            'pytest' in sys.modules
            or os.environ.get('RADIKO_GUIDE_TEST_MODE', '').lower() == 'true'
        )

    def _resolve_level(self, log_level: Optional[Union[str, int]]) -> int:
        if log_level is None:
            log_level = os.environ.get('RADIKO_GUIDE_LOG_LEVEL', self.DEFAULT_LOG_LEVEL)
        if isinstance(log_level, str):
            log_level = getattr(logging, log_level.upper(), self.DEFAULT_LOG_LEVEL)

        # テスト時はERRORレベル以上のみ
        if self._is_test_mode:
            return max(log_level, logging.ERROR)
        return log_level

    def _file_handler(self, log_file: str, max_log_size: int) -> Optional[logging.Handler]:
        try:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            return RotatingFileHandler(
                log_file,
                maxBytes=max_log_size,
                backupCount=self.BACKUP_COUNT,
                encoding='utf-8'
            )
        except OSError as e:
            print(f"Warning: Failed to create log file handler: {e}", file=sys.stderr)
            return None

    def setup_logging(self,
                      log_level: Optional[Union[str, int]] = None,
                      log_file: Optional[str] = None,
                      console_output: Optional[bool] = None,
                      max_log_size: Optional[int] = None) -> None:
        """
        ログ設定を初期化

        Args:
            log_level: ログレベル（DEBUG, INFO, WARNING, ERROR, CRITICAL）
            log_file: ログファイルパス（テスト時は無視）
            console_output: 標準エラーへの出力有無（None時は RADIKO_GUIDE_CONSOLE_OUTPUT）
            max_log_size: ログファイルの最大サイズ（バイト）
        """
        if self._initialized:
            return

        level = self._resolve_level(log_level)

        if log_file is None:
            log_file = os.environ.get('RADIKO_GUIDE_LOG_FILE', self.DEFAULT_LOG_FILE)
        if console_output is None:
            console_output = os.environ.get('RADIKO_GUIDE_CONSOLE_OUTPUT', '').lower() == 'true'

        handlers: List[logging.Handler] = []
        if log_file and not self._is_test_mode:
            file_handler = self._file_handler(log_file, max_log_size or self.DEFAULT_MAX_LOG_SIZE)
            if file_handler:
                handlers.append(file_handler)
        if console_output:
            handlers.append(logging.StreamHandler(sys.stderr))

        logging.basicConfig(
            level=level,
            handlers=handlers or [logging.NullHandler()],
            format=self.LOG_FORMAT,
            datefmt='%Y-%m-%d %H:%M:%S',
            force=True
        )
        self._initialized = True

        logging.getLogger(__name__).debug(
            f"ログ設定完了 - レベル: {logging.getLevelName(level)}, ファイル: {log_file}"
        )

    def get_logger(self, name: str) -> logging.Logger:
        """設定済みのロガーを取得（未初期化なら既定値で初期化）"""
        if not self._initialized:
            self.setup_logging()
        return logging.getLogger(name)

    def is_test_mode(self) -> bool:
        return self._is_test_mode

    def reset(self) -> None:
        """ログ設定をリセット"""
        self._initialized = False
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)


# グローバルインスタンス
_log_config = RadikoGuideLogConfig()


def setup_logging(log_level: Optional[Union[str, int]] = None,
                  log_file: Optional[str] = None,
                  console_output: Optional[bool] = None,
                  max_log_size: Optional[int] = None) -> None:
    """radiko-guideのログ設定を初期化

    ロガー取得時に既定値で初期化済みの場合も、指定値で設定し直します。
    """
    _log_config.reset()
    _log_config.setup_logging(log_level, log_file, console_output, max_log_size)


def get_logger(name: str) -> logging.Logger:
    """設定済みのロガーを取得"""
    return _log_config.get_logger(name)
