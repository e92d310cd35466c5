# -*- coding: utf-8 -*-
"""
画面状態（基準日・表示モード・フィルタ・詳細ダイアログ）とシフト操作
"""

import logging
from datetime import date

from models import ShiftStore
from .calendar_service import (
    VIEW_MONTH, get_view_window, get_days_in_view, navigate,
    get_calendar_title, get_calendar_data, parse_view_mode
)
from .detail_view import DetailView, STATE_EDITING
from .shift_filter import NO_FILTER, filter_shifts, shifts_in_window
from .validation import validate_registration, validate_shift_update, build_shifts_for_range

logger = logging.getLogger(__name__)


class ScheduleSession:
    """1ユーザー分の画面状態"""

    def __init__(self, store=None):
        self.store = store if store is not None else ShiftStore()
        # 基準日は初回表示時に設定する
        self.reference_date = None
        self.view_mode = VIEW_MONTH
        self.shift_filter = NO_FILTER
        self.detail = DetailView()

    # -------------------------------------------------------------------------
    # 表示状態
    # -------------------------------------------------------------------------

    @property
    def is_initialized(self):
        return self.reference_date is not None

    def initialize(self, today=None):
        """基準日を今日に設定（1回だけ）"""
        if self.reference_date is None:
            self.reference_date = today or date.today()

    def set_reference_date(self, value):
        self.reference_date = value

    def set_view_mode(self, mode):
        # 基準日はそのまま
        self.view_mode = parse_view_mode(mode)

    def set_filter(self, shift_filter):
        self.shift_filter = shift_filter
        self.detail.refresh(self.store.shifts, self.shift_filter)

    def go_today(self, today=None):
        self.reference_date = today or date.today()

    def go_prev(self):
        self.reference_date = navigate(self.reference_date, self.view_mode, -1)

    def go_next(self):
        self.reference_date = navigate(self.reference_date, self.view_mode, 1)

    @property
    def window(self):
        return get_view_window(self.reference_date, self.view_mode)

    @property
    def filtered_shifts(self):
        return filter_shifts(self.store.shifts, self.shift_filter)

    def shifts_for_export(self):
        """現在のフィルタと表示範囲に含まれるシフト"""
        start, end = self.window
        return shifts_in_window(self.filtered_shifts, start, end)

    def calendar(self, today=None):
        start, end = self.window
        return {
            "loading": not self.is_initialized,
            "title": get_calendar_title(self.reference_date, self.view_mode),
            "view": self.view_mode,
            "reference_date": self.reference_date.isoformat() if self.reference_date else None,
            "start": start.isoformat() if start else None,
            "end": end.isoformat() if end else None,
            "days": [d.isoformat() for d in get_days_in_view(self.reference_date, self.view_mode)],
            "filter": self.shift_filter.to_dict(),
            "cells": get_calendar_data(self.reference_date, self.view_mode,
                                       self.store.shifts, self.shift_filter, today)
            if self.is_initialized else [],
        }

    # -------------------------------------------------------------------------
    # シフト操作
    # -------------------------------------------------------------------------

    def register(self, payload):
        """登録フォームの内容から期間分のシフトを追加"""
        cleaned = validate_registration(payload)
        created = self.store.add(build_shifts_for_range(cleaned))
        self.detail.refresh(self.store.shifts, self.shift_filter)
        logger.info("%s / %s: %s〜%s (%s-%s) を登録",
                    cleaned['worker'], cleaned['area'],
                    cleaned['date_from'], cleaned['date_to'],
                    cleaned['start_time'], cleaned['end_time'])
        return created

    def update_shift(self, shift_id, payload):
        """シフトを丸ごと置き換える"""
        existing = self.store.get(shift_id)
        updated = self.store.replace(validate_shift_update(payload, existing))
        self.detail.refresh(self.store.shifts, self.shift_filter)
        return updated

    def delete_shift(self, shift_id):
        removed = self.store.delete(shift_id)
        self.detail.refresh(self.store.shifts, self.shift_filter)
        return removed

    # -------------------------------------------------------------------------
    # 詳細ダイアログ
    # -------------------------------------------------------------------------

    def open_day(self, day):
        return self.detail.open(day, self.store.shifts, self.shift_filter)

    def save_edit(self, payload):
        """編集中のシフトを保存して閲覧状態に戻る"""
        if self.detail.state != STATE_EDITING:
            raise RuntimeError("編集中のシフトがありません")
        updated = self.update_shift(self.detail.editing_id, payload)
        self.detail.end_edit()
        return updated
