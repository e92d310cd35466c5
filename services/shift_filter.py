# -*- coding: utf-8 -*-
"""
シフトの絞り込み・日別集計サービス
"""

from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime

FILTER_NONE = 'none'
FILTER_WORKER = 'worker'
FILTER_AREA = 'area'
FILTER_KINDS = (FILTER_NONE, FILTER_WORKER, FILTER_AREA)


@dataclass(frozen=True)
class ShiftFilter:
    """スタッフ or エリアの完全一致フィルタ（値が空なら全件表示）"""
    kind: str = FILTER_NONE
    value: str = ""

    @classmethod
    def from_args(cls, kind=None, value=None):
        if not isinstance(kind or "", str) or not isinstance(value or "", str):
            raise ValueError("フィルタの指定が不正です")
        kind = (kind or FILTER_NONE).strip().lower()
        if kind not in FILTER_KINDS:
            raise ValueError(f"不明なフィルタ種別です: {kind}")
        return cls(kind=kind, value=(value or "") if kind != FILTER_NONE else "")

    @property
    def is_active(self):
        return self.kind != FILTER_NONE and self.value != ""

    def matches(self, shift):
        if not self.is_active:
            return True
        if self.kind == FILTER_WORKER:
            return shift.worker == self.value
        return shift.area == self.value

    def to_dict(self):
        return {"type": self.kind, "value": self.value, "active": self.is_active}


NO_FILTER = ShiftFilter()


def _as_date(day):
    return day.date() if isinstance(day, datetime) else day


def filter_shifts(shifts, shift_filter=None):
    if shift_filter is None or not shift_filter.is_active:
        return list(shifts)
    return [s for s in shifts if shift_filter.matches(s)]


def get_shifts_for_day(day, shifts):
    """指定日のシフトを開始時刻順で返す（開始時刻が空のものが先頭）"""
    day = _as_date(day)
    return sorted((s for s in shifts if s.date == day),
                  key=lambda s: s.start_time or "")


def get_day_counts(day, shifts, shift_filter=None):
    """(フィルタ後の件数, 全件数)"""
    day_shifts = get_shifts_for_day(day, shifts)
    return len(filter_shifts(day_shifts, shift_filter)), len(day_shifts)


@dataclass(frozen=True)
class DaySelection:
    day: object
    shifts: list
    total_count: int
    filter_active: bool

    @property
    def is_empty(self):
        return not self.shifts

    @property
    def hidden_count(self):
        return self.total_count - len(self.shifts)

    @property
    def message(self):
        if self.shifts:
            return None
        date_str = self.day.isoformat()
        if self.total_count > 0 and self.filter_active:
            return f"{date_str} にフィルタに一致するシフトはありません"
        return f"{date_str} に登録されたシフトはありません"

    def to_dict(self):
        return {
            "date": self.day.isoformat(),
            "shifts": [s.to_dict() for s in self.shifts],
            "shift_count": len(self.shifts),
            "total_count": self.total_count,
            "hidden_count": self.hidden_count,
            "is_empty": self.is_empty,
            "message": self.message,
        }


def select_day(day, shifts, shift_filter=None):
    """日付クリック時の選択結果"""
    day = _as_date(day)
    all_for_day = get_shifts_for_day(day, shifts)
    return DaySelection(
        day=day,
        shifts=filter_shifts(all_for_day, shift_filter),
        total_count=len(all_for_day),
        filter_active=bool(shift_filter and shift_filter.is_active),
    )


def shifts_in_window(shifts, start, end):
    if start is None or end is None:
        return []
    return [s for s in shifts if start <= s.date <= end]


def group_by_area(shifts):
    """エリア名順にグループ化。各グループは日付→開始時刻順"""
    grouped = OrderedDict()
    for area in sorted({s.area for s in shifts}):
        grouped[area] = sorted((s for s in shifts if s.area == area),
                               key=lambda s: (s.date, s.start_time or ""))
    return grouped
