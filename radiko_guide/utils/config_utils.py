"""
設定ファイル管理ユーティリティ

JSON設定ファイルの読み込み・保存・検証を提供します。
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from radiko_guide.errors import ConfigurationError
from radiko_guide.logging_config import get_logger

logger = get_logger(__name__)


DEFAULT_CONFIG: Dict[str, Any] = {
    "base_url": "https://radiko.jp",
    "timeout": 30,
    "area_id": "",
    "log_level": "INFO",
    "log_file": "radiko_guide.log",
    "max_log_size_mb": 10,
}

REQUIRED_KEYS = ["base_url", "timeout"]


class ConfigManager:
    """設定管理クラス

    Usage:
        config_manager = ConfigManager("config.json")
        config = config_manager.load_config()
        config_manager.save_config(config)
    """

    def __init__(self, config_path: Union[str, Path], encoding: str = 'utf-8'):
        self.config_path = Path(config_path)
        self.encoding = encoding

    def load_config(self, default_config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """設定ファイルを読み込み、デフォルト設定にマージして返す

        ファイルが存在しない場合はデフォルト設定を返します。

        Raises:
            ConfigurationError: JSONが不正、または必須キーの検証に失敗
        """
        if default_config is None:
            default_config = DEFAULT_CONFIG

        merged_config = dict(default_config)

        if not self.config_path.exists():
            logger.info(f"設定ファイルが存在しません、デフォルト設定を使用: {self.config_path}")
            return merged_config

        try:
            with open(self.config_path, 'r', encoding=self.encoding) as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"設定ファイルJSON解析エラー: {self.config_path} - {e}")
            raise ConfigurationError(f"設定ファイルの解析に失敗しました: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError("設定データが辞書型ではありません")

        merged_config.update(config)
        self.validate_config(merged_config)

        logger.debug(f"設定ファイル読み込み成功: {self.config_path}")
        return merged_config

    def save_config(self, config: Dict[str, Any], indent: int = 2) -> None:
        """設定ファイルを保存（一時ファイル経由で原子的に置換）"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        temp_path = self.config_path.with_suffix('.tmp')
        with open(temp_path, 'w', encoding=self.encoding) as f:
            json.dump(config, f, ensure_ascii=False, indent=indent)

        temp_path.replace(self.config_path)
        logger.debug(f"設定ファイル保存成功: {self.config_path}")

    def validate_config(self, config: Dict[str, Any],
                        required_keys: Optional[List[str]] = None) -> None:
        """設定データの検証"""
        if required_keys is None:
            required_keys = REQUIRED_KEYS

        missing_keys = [key for key in required_keys if key not in config]
        if missing_keys:
            logger.error(f"必須キーが不足しています: {missing_keys}")
            raise ConfigurationError(f"必須キーが不足しています: {missing_keys}")

        timeout = config.get("timeout")
        if not isinstance(timeout, (int, float)) or isinstance(timeout, bool) or timeout <= 0:
            raise ConfigurationError(f"timeout が不正です: {timeout!r}")
