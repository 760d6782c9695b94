"""Supabase データベース操作モジュール.

snacks テーブルは SNACKDB_SCHEMA スキーマに配置。
Supabase client のスキーマ指定は .schema() で行う。
接続はモジュール変数ではなく Database ハンドルで持ち回る。
"""

from __future__ import annotations

import logging

import httpx
from postgrest.exceptions import APIError
from supabase import AsyncClient, SupabaseException, acreate_client

from snackdb.config import (
    REQUIRED_FIELDS,
    SNACKS_SCHEMA,
    SNACKS_TABLE,
    SUPABASE_SECRET_KEY,
    SUPABASE_URL,
    UPDATABLE_FIELDS,
)
from snackdb.models import DatabaseConnectionError, Snack, SnackValidationError
from snackdb.similarity import contains_ignore_case

logger = logging.getLogger(__name__)


class Database:
    """snacks テーブルへの接続ハンドル.

    connect() / disconnect() は冪等。async with で使うと終了時に必ず切断する。
    """

    def __init__(
        self,
        url: str = SUPABASE_URL,
        key: str = SUPABASE_SECRET_KEY,
        schema: str = SNACKS_SCHEMA,
        table: str = SNACKS_TABLE,
    ):
        self.url = url
        self.schema = schema
        self.table_name = table
        self._key = key
        self._client: AsyncClient | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> Database:
        """クライアントを作成し、テーブルへの疎通を確認する.

        Raises:
            DatabaseConnectionError: URL/キー未設定、認証失敗、到達不能
        """
        if self._client is not None:
            return self

        if not self.url or not self._key:
            raise DatabaseConnectionError("SUPABASE_URL / SUPABASE_SECRET_KEY が未設定です")

        try:
            client = await acreate_client(self.url, self._key)
            await (
                client.schema(self.schema)
                .table(self.table_name)
                .select("id")
                .limit(1)
                .execute()
            )
        except (SupabaseException, APIError, httpx.HTTPError) as e:
            logger.error("DB 接続失敗: url=%s, error=%s", self.url, e)
            raise DatabaseConnectionError(str(e)) from e

        self._client = client
        logger.info("DB 接続完了: %s (%s.%s)", self.url, self.schema, self.table_name)
        return self

    async def disconnect(self) -> None:
        """クライアント参照を破棄する（HTTP ベースのため明示的な切断処理はない）."""
        if self._client is None:
            return
        self._client = None
        logger.info("DB 切断完了")

    def table(self):
        """snacks テーブルのクエリビルダを返す."""
        if self._client is None:
            raise DatabaseConnectionError("DB に接続していません")
        return self._client.schema(self.schema).table(self.table_name)

    async def __aenter__(self) -> Database:
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()


def validate_snack(snack: Snack) -> None:
    """必須フィールドが全て空でないことを確認する.

    Raises:
        SnackValidationError: 空のフィールドがある場合
    """
    missing = [f for f in REQUIRED_FIELDS if not getattr(snack, f)]
    if missing:
        raise SnackValidationError(missing)


async def insert_snack(db: Database, snack: Snack) -> Snack:
    """snack を1件挿入し、採番済みのレコードを返す."""
    validate_snack(snack)
    resp = await db.table().insert(snack.to_row()).execute()
    stored = Snack.from_row(resp.data[0]) if resp.data else snack
    logger.debug("snacks に挿入: id=%s, name=%s", stored.id, stored.name)
    return stored


async def find_all_snacks(db: Database) -> list[Snack]:
    """全 snack を id 順で取得する."""
    resp = await db.table().select("*").order("id").execute()
    return [Snack.from_row(row) for row in resp.data]


async def find_snacks_by_substring(db: Database, pattern: str) -> list[Snack]:
    """name に pattern を含む snack を id 順で取得する（大文字小文字は無視）."""
    return [s for s in await find_all_snacks(db) if contains_ignore_case(s.name, pattern)]


async def find_one_snack_by_substring(db: Database, pattern: str) -> Snack | None:
    """name に pattern を含む最初の snack を返す。なければ None."""
    snacks = await find_snacks_by_substring(db, pattern)
    return snacks[0] if snacks else None


async def update_snack_fields(db: Database, snack: Snack, fields: dict) -> Snack:
    """snack の一部フィールドを更新する.

    Args:
        snack: 更新対象（id 必須）
        fields: {"description", "price", "image"} の部分集合

    Returns:
        更新後のレコード
    """
    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
    if not changes:
        return snack

    resp = await db.table().update(changes).eq("id", snack.id).execute()
    if resp.data:
        return Snack.from_row(resp.data[0])
    return Snack(**{**snack.__dict__, **changes})


async def delete_one_snack_by_substring(db: Database, pattern: str) -> Snack | None:
    """name に pattern を含む最初の snack を削除し、削除したレコードを返す."""
    target = await find_one_snack_by_substring(db, pattern)
    if target is None:
        return None
    await db.table().delete().eq("id", target.id).execute()
    logger.debug("snacks から削除: id=%s, name=%s", target.id, target.name)
    return target
