"""snack の登録・一覧・検索・更新・削除.

各操作は結果をログに出し、呼び出し元（スクリプト）が検証できるよう値を返す。
DB エラー・入力エラー・未検出はこの層で捕捉し、処理は継続する。
"""

from __future__ import annotations

import logging

import httpx
from postgrest.exceptions import APIError

from snackdb.db import (
    Database,
    delete_one_snack_by_substring,
    find_all_snacks,
    find_one_snack_by_substring,
    find_snacks_by_substring,
    insert_snack,
    update_snack_fields,
)
from snackdb.models import Snack, SnackNotFoundError, SnackValidationError
from snackdb.similarity import find_best_match, rate_candidates

logger = logging.getLogger(__name__)

# PostgREST のエラーと通信エラー
STORAGE_ERRORS = (APIError, httpx.HTTPError)


async def create_snack(
    db: Database, name: str, description: str, price: str, image: str
) -> Snack | None:
    """snack を登録する。失敗時は None."""
    try:
        snack = await insert_snack(db, Snack(name, description, price, image))
    except SnackValidationError as e:
        logger.error("snack 登録失敗（入力不備）: name=%s, error=%s", name, e)
        return None
    except STORAGE_ERRORS as e:
        logger.error("snack 登録失敗: name=%s, error=%s", name, e)
        return None

    logger.info("snack %s を登録しました", snack.name)
    return snack


async def list_snacks(db: Database) -> list[Snack]:
    """登録済みの snack を全件表示する."""
    try:
        snacks = await find_all_snacks(db)
    except STORAGE_ERRORS as e:
        logger.error("snack 一覧取得失敗: %s", e)
        return []

    if not snacks:
        logger.info("登録済みの snack はありません")
        return snacks

    logger.info("snack 一覧:")
    for snack in snacks:
        logger.info("  %s", snack.describe())
    return snacks


async def search_snack_by_name(db: Database, name: str) -> Snack | None:
    """名前の部分一致で候補を絞り、最も類似度の高い snack を返す."""
    try:
        candidates = await find_snacks_by_substring(db, name)
        if not candidates:
            raise SnackNotFoundError(name)
    except SnackNotFoundError:
        logger.info("snack が見つかりません: %s", name)
        return None
    except STORAGE_ERRORS as e:
        logger.error("snack 検索失敗: name=%s, error=%s", name, e)
        return None

    by_id = {s.id: s for s in candidates}
    pairs = [(s.id, s.name) for s in candidates]
    if logger.isEnabledFor(logging.DEBUG):
        for rating in rate_candidates(name, pairs):
            logger.debug("  候補 %s: %.3f", rating.name, rating.score)

    # 候補は空でないので必ず見つかる
    match = find_best_match(name, pairs)
    snack = by_id[match.id]
    logger.info("snack が見つかりました (類似度 %.2f): %s", match.score, snack.describe())
    return snack


async def update_snack(
    db: Database,
    name: str,
    description: str | None = None,
    price: str | None = None,
    image: str | None = None,
) -> Snack | None:
    """名前の部分一致で最初の snack を更新する.

    省略（None）または空文字のフィールドは現在の値を維持する。
    """
    try:
        snack = await find_one_snack_by_substring(db, name)
        if snack is None:
            raise SnackNotFoundError(name)
        updated = await update_snack_fields(db, snack, {
            "description": description or snack.description,
            "price": price or snack.price,
            "image": image or snack.image,
        })
    except SnackNotFoundError:
        logger.info("snack が見つかりません: %s", name)
        return None
    except STORAGE_ERRORS as e:
        logger.error("snack 更新失敗: name=%s, error=%s", name, e)
        return None

    logger.info("snack %s を更新しました", updated.name)
    return updated


async def delete_snack(db: Database, name: str) -> Snack | None:
    """名前の部分一致で最初の snack を削除する."""
    try:
        snack = await delete_one_snack_by_substring(db, name)
        if snack is None:
            raise SnackNotFoundError(name)
    except SnackNotFoundError:
        logger.info("snack が見つかりません: %s", name)
        return None
    except STORAGE_ERRORS as e:
        logger.error("snack 削除失敗: name=%s, error=%s", name, e)
        return None

    logger.info("snack %s を削除しました", snack.name)
    return snack
