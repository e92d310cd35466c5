# -*- coding: utf-8 -*-
"""
入力チェック（登録フォーム・編集フォーム）
"""

import re
from datetime import timedelta

from config import TIME_PATTERN, LOCATIONS
from models import Shift, new_shift_id, parse_date, workers_for, is_valid_pair

TIME_RE = re.compile(TIME_PATTERN)

DATE_RANGE_ORDER_MESSAGE = "終了日は開始日以降にしてください"


class ValidationError(ValueError):
    """項目ごとのエラーメッセージを持つ入力エラー"""

    def __init__(self, errors):
        super().__init__("入力内容に誤りがあります")
        self.errors = errors


def _text(payload, key):
    value = payload.get(key)
    return value.strip() if isinstance(value, str) else ""


def _check_shift_fields(payload, errors):
    """dateRange以外の共通項目をチェックしてクリーンな値を返す"""
    area = _text(payload, 'area')
    worker = _text(payload, 'worker')
    start_time = _text(payload, 'startTime')
    end_time = _text(payload, 'endTime')
    location = _text(payload, 'location')
    comments = _text(payload, 'comments') or None

    if not area:
        errors['area'] = "エリアを選択してください"
    elif not workers_for(area):
        errors['area'] = f"不明なエリアです: {area}"

    if not worker:
        errors['worker'] = "スタッフを選択してください"
    elif 'area' not in errors and not is_valid_pair(worker, area):
        errors['worker'] = f"{worker} は {area} に所属していません"

    if not TIME_RE.match(start_time):
        errors['startTime'] = "開始時刻の形式が不正です (HH:MM)"
    if not TIME_RE.match(end_time):
        errors['endTime'] = "終了時刻の形式が不正です (HH:MM)"
    elif 'startTime' not in errors and end_time <= start_time:
        errors['endTime'] = "終了時刻は開始時刻より後にしてください"

    if location not in LOCATIONS:
        errors['location'] = f"勤務場所は {' / '.join(LOCATIONS)} から選択してください"

    return {
        "worker": worker,
        "area": area,
        "start_time": start_time,
        "end_time": end_time,
        "location": location,
        "comments": comments,
    }


def validate_registration(payload):
    """登録フォームのチェック。問題があればValidationError"""
    payload = payload or {}
    errors = {}

    date_from = date_to = None
    date_range = payload.get('dateRange')
    if not isinstance(date_range, dict) or not date_range.get('from') or not date_range.get('to'):
        errors['dateRange'] = "開始日と終了日を選択してください"
    else:
        try:
            date_from = parse_date(date_range['from'])
            date_to = parse_date(date_range['to'])
        except (TypeError, ValueError):
            errors['dateRange'] = "日付の形式が不正です"
        else:
            if date_from > date_to:
                errors['dateRange'] = DATE_RANGE_ORDER_MESSAGE

    cleaned = _check_shift_fields(payload, errors)
    if errors:
        raise ValidationError(errors)

    cleaned['date_from'] = date_from
    cleaned['date_to'] = date_to
    return cleaned


def validate_shift_update(payload, existing):
    """編集フォームのチェック。dateを省略した場合は元の日付のまま"""
    payload = payload or {}
    errors = {}

    shift_date = existing.date
    if payload.get('date'):
        try:
            shift_date = parse_date(payload['date'])
        except (TypeError, ValueError):
            errors['date'] = "日付の形式が不正です"

    cleaned = _check_shift_fields(payload, errors)
    if errors:
        raise ValidationError(errors)

    return existing.with_changes(date=shift_date, **cleaned)


def build_shifts_for_range(cleaned):
    """期間内の1日ごとにシフトを作成"""
    days = (cleaned['date_to'] - cleaned['date_from']).days + 1
    return [
        Shift(
            id=new_shift_id(),
            date=cleaned['date_from'] + timedelta(days=i),
            worker=cleaned['worker'],
            area=cleaned['area'],
            start_time=cleaned['start_time'],
            end_time=cleaned['end_time'],
            location=cleaned['location'],
            comments=cleaned['comments'],
        )
        for i in range(days)
    ]
