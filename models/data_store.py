# -*- coding: utf-8 -*-
"""
データ管理（Firestore優先、ローカルJSONフォールバック）
"""

import json
import logging
import re
from datetime import date, datetime
from pathlib import Path

from config import (
    DATA_DIR, SHIFTS_FILE, STORAGE_KEY, STORAGE_COLLECTION,
    FIRESTORE_AVAILABLE, FIREBASE_KEY_FILE, GOOGLE_CLOUD_PROJECT,
    DEFAULT_LOCATION, LOCATIONS, TIME_PATTERN
)
from .roster import is_valid_pair
from .shift import Shift, new_shift_id

if FIRESTORE_AVAILABLE:
    from google.cloud import firestore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('date', 'worker', 'area', 'startTime', 'endTime')
STRING_FIELDS = ('id', 'worker', 'area', 'startTime', 'endTime', 'location', 'comments')

_TIME_RE = re.compile(TIME_PATTERN)


class ShiftLoadError(Exception):
    """保存データが壊れている（読み込み時）"""


def get_firestore_client():
    """Firestoreクライアントを取得"""
    if not FIRESTORE_AVAILABLE:
        return None
    try:
        # サービスアカウントキーファイルがあれば使用
        key_path = Path(FIREBASE_KEY_FILE)
        if key_path.exists():
            return firestore.Client.from_service_account_json(str(key_path))
        return firestore.Client(project=GOOGLE_CLOUD_PROJECT)
    except Exception as e:
        logger.warning("Firestore接続エラー: %s", e)
        return None


def ensure_data_dir():
    """データディレクトリを作成"""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


# =============================================================================
# シリアライズ
# =============================================================================

def parse_date(value):
    """ISO文字列（日付 or 日時）を日付に変換。時刻部分は無視する"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"日付ではありません: {value!r}")
    value = value.strip()
    if len(value) > 10:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
    return date.fromisoformat(value)


def serialize_shifts(shifts):
    return [s.to_dict() for s in shifts]


def _check_record(idx, record):
    """1件分の保存データを検査。不正ならShiftLoadError"""
    for key in STRING_FIELDS:
        value = record.get(key)
        if value is not None and not isinstance(value, str):
            raise ShiftLoadError(f"{idx}件目の{key}が文字列ではありません: {value!r}")
    for key in ('startTime', 'endTime'):
        if not _TIME_RE.match(record[key]):
            raise ShiftLoadError(f"{idx}件目の{key}がHH:MM形式ではありません: {record[key]}")
    if record['endTime'] <= record['startTime']:
        raise ShiftLoadError(f"{idx}件目の終了時刻が開始時刻以前です")
    location = record.get('location')
    if location and location not in LOCATIONS:
        raise ShiftLoadError(f"{idx}件目の勤務形態が不正です: {location}")
    if not is_valid_pair(record['worker'], record['area']):
        raise ShiftLoadError(f"{idx}件目の担当者がエリアに所属していません: "
                             f"{record['worker']} / {record['area']}")


def deserialize_shifts(records):
    """保存データをShiftのリストに変換。1件でも不正なら全体をエラーにする"""
    if not isinstance(records, list):
        raise ShiftLoadError("シフトデータが配列ではありません")

    shifts = []
    seen_ids = set()
    for idx, record in enumerate(records):
        if not isinstance(record, dict):
            raise ShiftLoadError(f"{idx}件目がオブジェクトではありません")
        missing = [key for key in REQUIRED_FIELDS if not record.get(key)]
        if missing:
            raise ShiftLoadError(f"{idx}件目に必須項目がありません: {', '.join(missing)}")
        try:
            shift_date = parse_date(record['date'])
        except ValueError as e:
            raise ShiftLoadError(f"{idx}件目の日付が不正です: {e}") from e
        _check_record(idx, record)

        # IDは一意であること
        shift_id = record.get('id') or new_shift_id()
        if shift_id in seen_ids:
            raise ShiftLoadError(f"{idx}件目のIDが重複しています: {shift_id}")
        seen_ids.add(shift_id)

        shifts.append(Shift(
            id=shift_id,
            date=shift_date,
            worker=record['worker'],
            area=record['area'],
            start_time=record['startTime'],
            end_time=record['endTime'],
            location=record.get('location') or DEFAULT_LOCATION,
            comments=record.get('comments') or None,
        ))
    return shifts


# =============================================================================
# シフトデータ管理
# =============================================================================

def _read_records():
    """保存済みの生データを取得。何も保存されていなければNone"""
    db = get_firestore_client()
    if db:
        try:
            doc = db.collection(STORAGE_COLLECTION).document(STORAGE_KEY).get()
            if doc.exists:
                return doc.to_dict().get('shifts')
        except Exception as e:
            logger.warning("Firestore読み込みエラー: %s", e)

    # ローカルファイルにフォールバック
    if not SHIFTS_FILE.exists():
        return None
    try:
        with open(SHIFTS_FILE, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ShiftLoadError(f"JSONの読み込みに失敗しました: {e}") from e
    except OSError as e:
        raise ShiftLoadError(f"ファイルを開けません: {e}") from e
    if not isinstance(data, dict):
        raise ShiftLoadError("保存データの形式が不正です")
    return data.get(STORAGE_KEY)


def try_load_shifts():
    """シフトを読み込む。壊れていればShiftLoadErrorを送出"""
    records = _read_records()
    if records is None:
        return []
    return deserialize_shifts(records)


def load_shifts():
    """シフトを読み込む。壊れたデータは破棄して空で始める"""
    try:
        shifts = try_load_shifts()
    except ShiftLoadError as e:
        logger.warning("保存データを破棄しました: %s", e)
        return []
    logger.info("シフト読み込み: %d件", len(shifts))
    return shifts


def save_shifts(shifts):
    """シフトを保存（Firestoreとローカル両方）"""
    records = serialize_shifts(shifts)
    success = True

    db = get_firestore_client()
    if db:
        try:
            db.collection(STORAGE_COLLECTION).document(STORAGE_KEY).set({"shifts": records})
        except Exception as e:
            logger.warning("Firestore保存エラー: %s", e)
            success = False

    # ローカルにも保存（バックアップ）
    try:
        ensure_data_dir()
        with open(SHIFTS_FILE, 'w', encoding='utf-8') as f:
            json.dump({STORAGE_KEY: records}, f, ensure_ascii=False, indent=2)
    except OSError as e:
        logger.warning("シフト保存エラー: %s", e)
        success = False
    return success
