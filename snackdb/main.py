"""snack カタログ操作 — メインエントリーポイント.

処理フロー:
  1. DB に接続（失敗したら終了コード 1）
  2. サンプル snack を登録
  3. 一覧表示
  4. 名前で検索（あいまい一致）
  5. 更新
  6. 削除
  7. 切断（成功・失敗にかかわらず必ず実行）
"""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from datetime import datetime
from functools import partial

from snackdb.config import LOG_DIR
from snackdb.db import Database
from snackdb.models import DatabaseConnectionError, SnackDBError, Step, StepResult
from snackdb.snacks import (
    STORAGE_ERRORS,
    create_snack,
    delete_snack,
    list_snacks,
    search_snack_by_name,
    update_snack,
)

logger = logging.getLogger(__name__)

# (name, description, price, image)
SAMPLE_SNACKS = [
    ("Hamburguer Simples", "Pão, carne, queijo", "R$ 10,00", "./img/snack1.jpg"),
    ("Hamburguer Duplo", "Pão, duas carnes, queijo", "R$ 15,00", "./img/snack2.jpg"),
    ("Hamburguer Triplo", "Pão, três carnes, queijo", "R$ 20,00", "./img/snack3.jpg"),
    ("X-Salada", "Pão, carne, queijo, alface, tomate", "R$ 12,00", "./img/snack4.jpg"),
    ("X-Bacon", "Pão, carne, queijo, bacon", "R$ 14,00", "./img/snack5.jpg"),
    ("X-Tudo", "Pão, carne, queijo, bacon, alface, tomate, ovo", "R$ 18,00", "./img/snack6.jpg"),
    ("Porção de Fritas Pequena", "Fritas", "R$ 8,00", "./img/snack7.jpg"),
    ("Porção de Fritas Média", "Fritas", "R$ 12,00", "./img/snack8.jpg"),
    ("Porção de Fritas Grande", "Fritas", "R$ 16,00", "./img/snack9.jpg"),
]


def setup_logging() -> None:
    """ロギングの初期設定."""
    log_file = LOG_DIR / f"snackdb_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


def build_steps() -> list[Step]:
    """サンプル操作のステップ一覧を実行順で返す."""
    steps = [
        Step(f"create {name}", partial(_call, create_snack, name, description, price, image))
        for name, description, price, image in SAMPLE_SNACKS
    ]
    steps.append(Step("list", list_snacks))

    for name in ("Hamburguer Duplo", "X-tudo", "pizza"):  # pizza は未検出の確認
        steps.append(Step(f"search {name}", partial(_call, search_snack_by_name, name)))

    updates = [
        ("Hamburguer Simples", "Pão, carne, queijo especial", "R$ 12,00", "./img/snack10.jpg"),
        ("X-Bacon", "Pão, carne, queijo, bacon, molho especial", "R$ 16,00", "./img/snack11.jpg"),
        # 未検出の確認
        ("Hamburguer especial", "Pão, carne, queijo especial", "R$ 12,00", "./img/snack10.jpg"),
    ]
    for name, description, price, image in updates:
        steps.append(Step(
            f"update {name}",
            partial(_call, update_snack, name, description, price, image),
        ))

    for name in ("Hamburguer Triplo", "Pastel"):  # Pastel は未検出の確認
        steps.append(Step(f"delete {name}", partial(_call, delete_snack, name)))

    return steps


async def _call(func, *args, db: Database):
    return await func(db, *args)


async def run_steps(db: Database, steps: list[Step]) -> list[StepResult]:
    """ステップを順に実行し、各結果を返す。失敗しても次のステップへ進む."""
    results: list[StepResult] = []
    for step in steps:
        logger.debug("実行中: %s", step.name)
        try:
            value = await step.action(db=db)
        except (SnackDBError, *STORAGE_ERRORS) as e:
            logger.error("ステップ失敗: %s, error=%s", step.name, e)
            results.append(StepResult(step.name, ok=False, error=e))
            continue
        results.append(StepResult(step.name, ok=True, value=value))
    return results


async def main(db: Database | None = None) -> int:
    """全ステップを実行し、終了コードを返す."""
    logger.info("=== snack カタログ操作 開始 ===")
    start_time = time.time()
    db = db or Database()

    try:
        async with db:
            results = await run_steps(db, build_steps())
    except DatabaseConnectionError as e:
        logger.error("DB に接続できないため終了します: %s", e)
        return 1

    failed = sum(1 for r in results if not r.ok)
    elapsed = time.time() - start_time
    logger.info("=== snack カタログ操作 完了 ===")
    logger.info("ステップ: %d 件, 失敗: %d 件, 所要時間: %.1f 秒",
                len(results), failed, elapsed)
    return 0


def run() -> None:
    """コンソールスクリプト用エントリーポイント."""
    setup_logging()
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
