# -*- coding: utf-8 -*-
"""
サービス（ビジネスロジック）
"""

from .calendar_service import (
    get_view_window,
    get_days_in_view,
    navigate,
    get_calendar_title,
    get_calendar_data,
    get_export_filename,
    parse_view_mode,
)
from .shift_filter import (
    ShiftFilter,
    filter_shifts,
    get_shifts_for_day,
    get_day_counts,
    select_day,
    shifts_in_window,
    group_by_area,
)
from .validation import (
    ValidationError,
    validate_registration,
    validate_shift_update,
    build_shifts_for_range,
)
from .detail_view import DetailView
from .schedule_session import ScheduleSession
from .excel_export import create_excel_shifts
from .pdf_export import create_pdf_shifts
