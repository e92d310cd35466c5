# -*- coding: utf-8 -*-
"""
エリアとスタッフの対応表
"""

from config import AREA_WORKER_MAP


def all_areas():
    """エリア名一覧（昇順）"""
    return sorted(AREA_WORKER_MAP.keys())


def all_workers():
    """全スタッフ名（重複なし・昇順）"""
    return sorted({w for workers in AREA_WORKER_MAP.values() for w in workers})


def workers_for(area):
    """エリアに所属するスタッフ（未知のエリアは空）"""
    return sorted(AREA_WORKER_MAP.get(area, []))


def is_valid_pair(worker, area):
    return worker in AREA_WORKER_MAP.get(area, [])


def resolve_worker(area, worker):
    """エリア変更時のスタッフ選択。新しいエリアにいなければ空に戻す"""
    if worker and is_valid_pair(worker, area):
        return worker
    return ""
