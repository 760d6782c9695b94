"""データモデル・例外定義."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class Snack:
    """snacks テーブルの1レコードを表す."""

    name: str
    description: str
    price: str  # 表示用文字列 (例: "R$ 10,00")
    image: str  # 画像パス (例: ./img/snack1.jpg)
    id: int | None = None  # 挿入前は None

    @classmethod
    def from_row(cls, row: dict) -> Snack:
        """DB の行 dict から Snack を作る."""
        return cls(
            id=row.get("id"),
            name=row.get("name") or "",
            description=row.get("description") or "",
            price=row.get("price") or "",
            image=row.get("image") or "",
        )

    def to_row(self) -> dict:
        """挿入用の dict を返す（id は DB 側で採番）."""
        row = asdict(self)
        row.pop("id")
        return row

    def describe(self) -> str:
        return (
            f"名前: {self.name}, 説明: {self.description}, "
            f"価格: {self.price}, 画像: {self.image}"
        )


@dataclass(frozen=True)
class MatchResult:
    """あいまい検索の最良候補."""

    id: Any  # 候補の識別子（呼び出し側の id をそのまま返す）
    name: str
    score: float  # 0.0〜1.0


@dataclass
class Step:
    """スクリプトの1ステップ."""

    name: str
    action: Callable[..., Awaitable[Any]]  # action(db=Database)


@dataclass
class StepResult:
    """スクリプト1ステップの実行結果."""

    name: str
    ok: bool
    value: Any = None
    error: Exception | None = None


class SnackDBError(Exception):
    """snackdb の例外基底クラス."""


class DatabaseConnectionError(SnackDBError):
    """DB に接続できない（URL/キー未設定・認証失敗・到達不能）."""


class SnackNotFoundError(SnackDBError):
    """名前に一致する snack が存在しない."""

    def __init__(self, name: str):
        super().__init__(f"snack not found: {name!r}")
        self.name = name


class SnackValidationError(SnackDBError):
    """必須フィールドが欠けている."""

    def __init__(self, missing: list[str]):
        super().__init__(f"missing required fields: {', '.join(missing)}")
        self.missing = missing
