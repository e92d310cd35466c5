# -*- coding: utf-8 -*-
"""
カレンダー生成サービス
"""

import calendar
from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from .shift_filter import filter_shifts, get_shifts_for_day, get_day_counts

VIEW_MONTH = 'month'
VIEW_WEEK = 'week'
VIEW_DAY = 'day'
VIEW_MODES = (VIEW_MONTH, VIEW_WEEK, VIEW_DAY)

_VIEW_ALIASES = {
    'monthly': VIEW_MONTH,
    'weekly': VIEW_WEEK,
    'daily': VIEW_DAY,
}

WEEKDAY_NAMES = ['Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun']
LOADING_TITLE = "Loading..."


def parse_view_mode(value):
    if value is not None and not isinstance(value, str):
        raise ValueError(f"不明な表示モードです: {value!r}")
    mode = (value or VIEW_MONTH).strip().lower()
    mode = _VIEW_ALIASES.get(mode, mode)
    if mode not in VIEW_MODES:
        raise ValueError(f"不明な表示モードです: {value}")
    return mode


def start_of_week(d):
    """月曜始まり"""
    return d - timedelta(days=d.weekday())


def end_of_week(d):
    return d + timedelta(days=6 - d.weekday())


def get_view_window(reference, mode):
    """表示範囲 (開始日, 終了日) を返す。基準日が未設定なら (None, None)"""
    if reference is None:
        return None, None
    if mode == VIEW_MONTH:
        _, num_days = calendar.monthrange(reference.year, reference.month)
        first = reference.replace(day=1)
        last = reference.replace(day=num_days)
        return start_of_week(first), end_of_week(last)
    if mode == VIEW_WEEK:
        return start_of_week(reference), end_of_week(reference)
    if mode == VIEW_DAY:
        return reference, reference
    raise ValueError(f"不明な表示モードです: {mode}")


def get_days_in_view(reference, mode):
    start, end = get_view_window(reference, mode)
    if start is None:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def navigate(reference, mode, step):
    """前後の期間へ移動（step=-1: 前, 1: 次）"""
    if reference is None:
        return None
    if mode == VIEW_MONTH:
        return reference + relativedelta(months=step)
    if mode == VIEW_WEEK:
        return reference + timedelta(days=7 * step)
    if mode == VIEW_DAY:
        return reference + timedelta(days=step)
    raise ValueError(f"不明な表示モードです: {mode}")


def get_calendar_title(reference, mode):
    if reference is None:
        return LOADING_TITLE
    if mode == VIEW_MONTH:
        return f"{calendar.month_name[reference.month]} {reference.year}"
    if mode == VIEW_WEEK:
        start, end = get_view_window(reference, mode)
        return (f"{start.day} {calendar.month_abbr[start.month]} - "
                f"{end.day} {calendar.month_abbr[end.month]}, {end.year}")
    return (f"{calendar.day_name[reference.weekday()]}, "
            f"{calendar.month_name[reference.month]} {reference.day}, {reference.year}")


def get_period_label(reference, mode):
    """ファイル名用の期間表記"""
    if mode == VIEW_MONTH:
        return reference.strftime('%Y-%m')
    if mode == VIEW_WEEK:
        iso_year, iso_week, _ = reference.isocalendar()
        return f"{iso_year}-W{iso_week:02d}"
    return reference.isoformat()


def get_export_filename(reference, mode, extension='xlsx'):
    return f"shiftmaster_schedule_{get_period_label(reference, mode)}_by_area.{extension}"


def get_calendar_data(reference, mode, shifts, shift_filter=None, today=None):
    """表示範囲の日ごとのセル情報を生成"""
    today = today or date.today()
    filter_active = bool(shift_filter and shift_filter.is_active)
    filtered = filter_shifts(shifts, shift_filter)

    cal_data = []
    for d in get_days_in_view(reference, mode):
        day_shifts = get_shifts_for_day(d, filtered)
        shift_count, total_count = get_day_counts(d, shifts, shift_filter)
        is_current_month = d.month == reference.month if mode == VIEW_MONTH else True

        cal_data.append({
            "date": d.isoformat(),
            "day": d.day,
            "weekday": d.weekday(),
            "weekday_name": WEEKDAY_NAMES[d.weekday()],
            "is_current_month": is_current_month,
            "is_today": d == today,
            "shifts": [s.to_dict() for s in day_shifts],
            "shift_count": shift_count,
            "total_count": total_count,
            "hidden_count": total_count - shift_count,
            "filter_active": filter_active,
        })

    return cal_data
