# -*- coding: utf-8 -*-
"""
APIルーティング
"""

import logging
from functools import wraps
from io import BytesIO

from flask import Blueprint, request, jsonify, send_file

from config import AREA_WORKER_MAP
from models import (
    ShiftNotFoundError, parse_date,
    all_areas, all_workers, workers_for, resolve_worker
)
from services import (
    ShiftFilter,
    ValidationError,
    filter_shifts,
    get_export_filename,
    get_calendar_title,
    create_excel_shifts,
    create_pdf_shifts
)
from .state import get_session

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')

XLSX_MIMETYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def api_error_handler(f):
    """想定内のエラーをJSONに変換し、それ以外はログに残して500を返す"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except ValidationError as e:
            return jsonify({"error": str(e), "errors": e.errors}), 400
        except ShiftNotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        except Exception as e:
            logger.error("APIエラー (%s): %s", f.__name__, e, exc_info=True)
            return jsonify({"error": "サーバーエラーが発生しました"}), 500
    return decorated_function


def _json_body():
    """JSONオブジェクト以外の本文は空として扱う"""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _download(output, filename, mimetype):
    response = send_file(
        output,
        mimetype=mimetype,
        as_attachment=True,
        download_name=filename
    )
    response.headers['X-Content-Type-Options'] = 'nosniff'
    response.headers['Cache-Control'] = 'no-cache'
    return response


# =============================================================================
# エリア・スタッフ
# =============================================================================

@api_bp.route('/roster', methods=['GET'])
def api_get_roster():
    return jsonify({
        "areas": all_areas(),
        "workers": all_workers(),
        "map": {area: workers_for(area) for area in AREA_WORKER_MAP},
    })


@api_bp.route('/roster/<area>/workers', methods=['GET'])
def api_get_area_workers(area):
    """エリアのスタッフ一覧と、エリア変更後も選択を維持できるスタッフ"""
    return jsonify({
        "workers": workers_for(area),
        "worker": resolve_worker(area, request.args.get('worker', '')),
    })


# =============================================================================
# シフト管理
# =============================================================================

@api_bp.route('/shifts', methods=['GET'])
@api_error_handler
def api_list_shifts():
    shift_filter = ShiftFilter.from_args(request.args.get('filter_type'),
                                         request.args.get('filter_value'))
    shifts = filter_shifts(get_session().store.shifts, shift_filter)
    return jsonify([s.to_dict() for s in shifts])


@api_bp.route('/shifts', methods=['POST'])
@api_error_handler
def api_add_shifts():
    created = get_session().register(_json_body())
    return jsonify({
        "success": True,
        "message": f"{len(created)}件のシフトを登録しました",
        "shifts": [s.to_dict() for s in created],
    }), 201


@api_bp.route('/shifts/<shift_id>', methods=['PUT'])
@api_error_handler
def api_update_shift(shift_id):
    updated = get_session().update_shift(shift_id, _json_body())
    return jsonify(updated.to_dict())


@api_bp.route('/shifts/<shift_id>', methods=['DELETE'])
@api_error_handler
def api_delete_shift(shift_id):
    removed = get_session().delete_shift(shift_id)
    return jsonify({
        "success": True,
        "message": f"{removed.worker} の {removed.date.isoformat()} のシフトを削除しました",
    })


# =============================================================================
# 表示状態・カレンダー
# =============================================================================

@api_bp.route('/view', methods=['GET', 'POST'])
@api_error_handler
def api_view():
    session = get_session()
    if request.method == 'POST':
        data = _json_body()
        if data.get('date'):
            session.set_reference_date(parse_date(data['date']))
        if data.get('view'):
            session.set_view_mode(data['view'])
        if 'filter_type' in data or 'filter_value' in data:
            session.set_filter(ShiftFilter.from_args(data.get('filter_type'),
                                                     data.get('filter_value')))

        action = data.get('action')
        if action == 'today':
            session.go_today()
        elif action == 'prev':
            session.go_prev()
        elif action == 'next':
            session.go_next()
        elif action:
            raise ValueError(f"不明な操作です: {action}")

    start, end = session.window
    return jsonify({
        "reference_date": session.reference_date.isoformat() if session.reference_date else None,
        "view": session.view_mode,
        "filter": session.shift_filter.to_dict(),
        "title": get_calendar_title(session.reference_date, session.view_mode),
        "start": start.isoformat() if start else None,
        "end": end.isoformat() if end else None,
    })


@api_bp.route('/calendar', methods=['GET'])
@api_error_handler
def api_get_calendar():
    return jsonify(get_session().calendar())


# =============================================================================
# 詳細ダイアログ
# =============================================================================

@api_bp.route('/detail', methods=['GET'])
def api_get_detail():
    return jsonify(get_session().detail.to_dict())


@api_bp.route('/detail/open', methods=['POST'])
@api_error_handler
def api_open_detail():
    session = get_session()
    day = _json_body().get('date')
    if not day:
        raise ValueError("日付を指定してください")
    selection = session.open_day(parse_date(day))
    if selection.is_empty:
        # ダイアログは開かずにメッセージだけ返す
        return jsonify({"state": session.detail.state, "notice": selection.message,
                        **selection.to_dict()})
    return jsonify(session.detail.to_dict())


@api_bp.route('/detail/edit/<shift_id>', methods=['POST'])
@api_error_handler
def api_start_edit(shift_id):
    detail = get_session().detail
    if not detail.is_open:
        return jsonify({"error": "詳細画面が開いていません"}), 409
    detail.start_edit(shift_id)
    return jsonify(detail.to_dict())


@api_bp.route('/detail/cancel', methods=['POST'])
def api_cancel_edit():
    detail = get_session().detail
    detail.end_edit()
    return jsonify(detail.to_dict())


@api_bp.route('/detail/save', methods=['POST'])
@api_error_handler
def api_save_edit():
    session = get_session()
    if session.detail.editing_id is None:
        return jsonify({"error": "編集中のシフトがありません"}), 409
    updated = session.save_edit(_json_body())
    return jsonify({"shift": updated.to_dict(), "detail": session.detail.to_dict()})


@api_bp.route('/detail/close', methods=['POST'])
def api_close_detail():
    detail = get_session().detail
    detail.close()
    return jsonify(detail.to_dict())


# =============================================================================
# エクスポート
# =============================================================================

def _export_target():
    session = get_session()
    if not session.is_initialized:
        return session, []
    return session, session.shifts_for_export()


@api_bp.route('/export_excel', methods=['POST'])
@api_error_handler
def api_export_excel():
    session, shifts = _export_target()
    if not shifts:
        return jsonify({"error": "選択した期間とフィルタに該当するシフトがありません"}), 400

    wb = create_excel_shifts(shifts)
    output = BytesIO()
    wb.save(output)
    output.seek(0)

    filename = get_export_filename(session.reference_date, session.view_mode)
    logger.info("Excel出力: %s (%d件)", filename, len(shifts))
    return _download(output, filename, XLSX_MIMETYPE)


@api_bp.route('/export_pdf', methods=['POST'])
@api_error_handler
def api_export_pdf():
    session, shifts = _export_target()
    if not shifts:
        return jsonify({"error": "選択した期間とフィルタに該当するシフトがありません"}), 400

    title = get_calendar_title(session.reference_date, session.view_mode)
    output = create_pdf_shifts(shifts, title)

    filename = get_export_filename(session.reference_date, session.view_mode, extension='pdf')
    logger.info("PDF出力: %s (%d件)", filename, len(shifts))
    return _download(output, filename, 'application/pdf')
