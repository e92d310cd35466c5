# -*- coding: utf-8 -*-
"""
Excel出力サービス（エリアごとにシートを分ける）
"""

import re

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from .shift_filter import group_by_area

COLUMNS = [
    ("Date", 12),
    ("Worker", 20),
    ("Location", 12),
    ("Start Time", 11),
    ("End Time", 11),
    ("Comments", 40),
]

INVALID_SHEET_CHARS = re.compile(r'[\[\]:*?/\\]')


def clean_sheet_name(name):
    """Excelのシート名に使えない文字を除き31文字以内にする"""
    cleaned = INVALID_SHEET_CHARS.sub('', name)[:31]
    return cleaned or "Sheet"


def create_excel_shifts(shifts):
    """Excel形式のシフト表を作成"""
    grouped = group_by_area(shifts)
    if not grouped:
        raise ValueError("出力するシフトがありません")

    wb = Workbook()
    wb.remove(wb.active)

    # スタイル定義
    thin_border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )
    header_fill = PatternFill(start_color='4472C4', end_color='4472C4', fill_type='solid')
    header_font = Font(color='FFFFFF', bold=True)
    remote_fill = PatternFill(start_color='DEEAF6', end_color='DEEAF6', fill_type='solid')

    used_names = set()
    for area, area_shifts in grouped.items():
        title = clean_sheet_name(area)
        # 整形後に名前が重複した場合は番号を付ける
        base, n = title, 2
        while title in used_names:
            suffix = f" ({n})"
            title = base[:31 - len(suffix)] + suffix
            n += 1
        used_names.add(title)
        ws = wb.create_sheet(title=title)

        # 列幅・ヘッダー行
        for col, (header, width) in enumerate(COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width
            cell = ws.cell(row=1, column=col, value=header)
            cell.fill = header_fill
            cell.font = header_font
            cell.border = thin_border
            cell.alignment = Alignment(horizontal='center', vertical='center')
        ws.freeze_panes = 'A2'

        for row, shift in enumerate(area_shifts, start=2):
            values = [
                shift.date.isoformat(),
                shift.worker,
                shift.location,
                shift.start_time,
                shift.end_time,
                shift.comments or '',
            ]
            for col, value in enumerate(values, start=1):
                cell = ws.cell(row=row, column=col, value=value)
                cell.border = thin_border
                if col < len(values):
                    cell.alignment = Alignment(horizontal='center', vertical='center')
                else:
                    cell.alignment = Alignment(vertical='center', wrap_text=True)
                if shift.location == 'Remote':
                    cell.fill = remote_fill

    return wb
