# -*- coding: utf-8 -*-
"""
シフトコレクションの管理

状態遷移（追加・置換・削除）は新しいリストを返す純粋関数として実装し、
ShiftStoreはその結果を保持して永続化へミラーするだけにする。
"""

import logging

from .shift import ShiftNotFoundError

logger = logging.getLogger(__name__)


def sort_shifts(shifts):
    """日付→開始時刻の順に並べる（同順位は元の順序を維持）"""
    return sorted(shifts, key=lambda s: (s.date, s.start_time or ""))


def add_shifts(shifts, new_shifts):
    return sort_shifts(list(shifts) + list(new_shifts))


def replace_shift(shifts, updated):
    """同じidのシフトを丸ごと置き換える。他のレコードはそのまま"""
    if not any(s.id == updated.id for s in shifts):
        raise ShiftNotFoundError(updated.id)
    return [updated if s.id == updated.id else s for s in shifts]


def delete_shift(shifts, shift_id):
    remaining = [s for s in shifts if s.id != shift_id]
    if len(remaining) == len(shifts):
        raise ShiftNotFoundError(shift_id)
    return remaining


def find_shift(shifts, shift_id):
    for s in shifts:
        if s.id == shift_id:
            return s
    raise ShiftNotFoundError(shift_id)


class ShiftStore:
    """メモリ上のシフト一覧。変更のたびにon_changeへ通知する"""

    def __init__(self, shifts=None, on_change=None):
        self._shifts = sort_shifts(shifts or [])
        self._on_change = on_change

    @property
    def shifts(self):
        return list(self._shifts)

    def __len__(self):
        return len(self._shifts)

    def get(self, shift_id):
        return find_shift(self._shifts, shift_id)

    def add(self, new_shifts):
        new_shifts = list(new_shifts)
        self._commit(add_shifts(self._shifts, new_shifts))
        logger.info("シフト追加: %d件", len(new_shifts))
        return new_shifts

    def replace(self, updated):
        self._commit(sort_shifts(replace_shift(self._shifts, updated)))
        logger.info("シフト更新: %s", updated.id)
        return updated

    def delete(self, shift_id):
        removed = find_shift(self._shifts, shift_id)
        self._commit(delete_shift(self._shifts, shift_id))
        logger.info("シフト削除: %s", shift_id)
        return removed

    def _commit(self, shifts):
        self._shifts = shifts
        if self._on_change is None:
            return
        # 永続化の失敗はメモリ上の状態に影響させない
        try:
            self._on_change(list(shifts))
        except Exception as e:
            logger.warning("シフトの保存に失敗しました: %s", e)
