"""設定モジュール — 環境変数・定数定義."""

import os
from pathlib import Path

from dotenv import load_dotenv

# .env はプロジェクトルートに配置
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# --- Supabase ---
# 未設定でも import は通す。接続時に DatabaseConnectionError になる
SUPABASE_URL: str = os.environ.get("SUPABASE_URL", "")
SUPABASE_SECRET_KEY: str = os.environ.get("SUPABASE_SECRET_KEY", "")

# --- テーブル ---
SNACKS_SCHEMA: str = os.environ.get("SNACKDB_SCHEMA", "public")
SNACKS_TABLE: str = os.environ.get("SNACKDB_TABLE", "snacks")

# 必須フィールド（空文字不可）
REQUIRED_FIELDS = ("name", "description", "price", "image")

# 更新可能フィールド（name は検索キーなので更新しない）
UPDATABLE_FIELDS = ("description", "price", "image")

# --- ログ ---
LOG_DIR = Path(os.environ.get("SNACKDB_LOG_DIR", _PROJECT_ROOT / "logs"))
LOG_DIR.mkdir(parents=True, exist_ok=True)
