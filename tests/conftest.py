"""テスト共通フィクスチャ."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from snackdb import snacks
from snackdb.db import Database, validate_snack
from snackdb.models import Snack
from snackdb.similarity import contains_ignore_case

_CHAIN_METHODS = ("select", "order", "limit", "insert", "update", "delete", "eq")


def _mock_chain(rows):
    chain = MagicMock()
    for method in _CHAIN_METHODS:
        getattr(chain, method).return_value = chain
    chain.execute = AsyncMock(return_value=MagicMock(data=rows))
    return chain


@pytest.fixture
def make_db():
    """接続済み Database とクエリチェーンのモックを作る."""

    def _make(rows=None):
        chain = _mock_chain(rows if rows is not None else [])
        client = MagicMock()
        client.schema.return_value.table.return_value = chain
        db = Database(url="https://example.supabase.co", key="secret")
        db._client = client
        return db, chain

    return _make


class FakeStore:
    """snackdb.db の操作をメモリ上で再現する."""

    def __init__(self):
        self.rows: list[Snack] = []
        self._next_id = 1

    async def insert(self, db, snack):
        validate_snack(snack)
        stored = Snack(snack.name, snack.description, snack.price, snack.image, id=self._next_id)
        self._next_id += 1
        self.rows.append(stored)
        return stored

    async def find_all(self, db):
        return list(self.rows)

    async def find_by_substring(self, db, pattern):
        return [s for s in self.rows if contains_ignore_case(s.name, pattern)]

    async def find_one(self, db, pattern):
        found = await self.find_by_substring(db, pattern)
        return found[0] if found else None

    async def update(self, db, snack, fields):
        for row in self.rows:
            if row.id == snack.id:
                for key, value in fields.items():
                    setattr(row, key, value)
                return row
        return snack

    async def delete_one(self, db, pattern):
        target = await self.find_one(db, pattern)
        if target is not None:
            self.rows.remove(target)
        return target


@pytest.fixture
def fake_store(monkeypatch):
    """snackdb.snacks が使う DB 操作を FakeStore に差し替える."""
    store = FakeStore()
    monkeypatch.setattr(snacks, "insert_snack", store.insert)
    monkeypatch.setattr(snacks, "find_all_snacks", store.find_all)
    monkeypatch.setattr(snacks, "find_snacks_by_substring", store.find_by_substring)
    monkeypatch.setattr(snacks, "find_one_snack_by_substring", store.find_one)
    monkeypatch.setattr(snacks, "update_snack_fields", store.update)
    monkeypatch.setattr(snacks, "delete_one_snack_by_substring", store.delete_one)
    return store
