"""
radiko-guide テストパッケージ

テスト構造:
- test_auth.py: エリア認証モジュールのテスト
- test_program_info.py: 番組情報モジュールのテスト
- test_guide_parser.py: 番組表XML解析のテスト
- test_network_utils.py: トランスポートのテスト
- test_config_manager.py: 設定管理のテスト
- test_cli.py: CLIのテスト
"""

import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
