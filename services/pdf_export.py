# -*- coding: utf-8 -*-
"""
PDF出力サービス
"""

from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

from .shift_filter import group_by_area

HEADERS = ['Date', 'Worker', 'Location', 'Start', 'End', 'Comments']
COL_WIDTHS = [28 * mm, 50 * mm, 28 * mm, 20 * mm, 20 * mm, 110 * mm]


def create_pdf_shifts(shifts, title):
    """PDF形式のシフト表を作成（エリアごとに表を分ける）"""
    grouped = group_by_area(shifts)
    if not grouped:
        raise ValueError("出力するシフトがありません")

    output = BytesIO()
    doc = SimpleDocTemplate(output, pagesize=landscape(A4),
                            leftMargin=10 * mm, rightMargin=10 * mm,
                            topMargin=10 * mm, bottomMargin=10 * mm,
                            title=title)
    styles = getSampleStyleSheet()
    cell_style = styles['BodyText']

    story = [Paragraph(escape(title), styles['Title'])]
    for area, area_shifts in grouped.items():
        story.append(Paragraph(escape(area), styles['Heading2']))

        rows = [HEADERS]
        for shift in area_shifts:
            rows.append([
                shift.date.isoformat(),
                shift.worker,
                shift.location,
                shift.start_time,
                shift.end_time,
                Paragraph(escape(shift.comments or ''), cell_style),
            ])

        table = Table(rows, colWidths=COL_WIDTHS, repeatRows=1)
        style = [
            ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#4472C4')),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('ALIGN', (0, 0), (-2, -1), 'CENTER'),
        ]
        for row_idx, shift in enumerate(area_shifts, start=1):
            if shift.location == 'Remote':
                style.append(('BACKGROUND', (0, row_idx), (-1, row_idx), colors.HexColor('#e6f0ff')))
        table.setStyle(TableStyle(style))

        story.append(table)
        story.append(Spacer(1, 6 * mm))

    doc.build(story)
    output.seek(0)
    return output
