# -*- coding: utf-8 -*-
"""
日別詳細ダイアログの状態管理

closed → (シフトのある日をクリック) → viewing → (編集) → editing
editing → (保存 / キャンセル) → viewing
表示中のシフトがなくなったら closed に戻る。
"""

from models import ShiftNotFoundError
from .shift_filter import select_day

STATE_CLOSED = 'closed'
STATE_VIEWING = 'viewing'
STATE_EDITING = 'editing'


class DetailView:

    def __init__(self):
        self.state = STATE_CLOSED
        self.selection = None
        self.editing_id = None

    @property
    def is_open(self):
        return self.state != STATE_CLOSED

    @property
    def day(self):
        return self.selection.day if self.selection else None

    def open(self, day, shifts, shift_filter=None):
        """日付を選択。該当シフトがなければ開かずに選択結果だけ返す"""
        selection = select_day(day, shifts, shift_filter)
        if selection.is_empty:
            return selection
        self.state = STATE_VIEWING
        self.selection = selection
        self.editing_id = None
        return selection

    def start_edit(self, shift_id):
        if not self.is_open:
            raise RuntimeError("詳細画面が開いていません")
        if not any(s.id == shift_id for s in self.selection.shifts):
            raise ShiftNotFoundError(shift_id)
        self.state = STATE_EDITING
        self.editing_id = shift_id

    def end_edit(self):
        """編集を終了して閲覧に戻る（保存・キャンセル共通）"""
        if self.state == STATE_EDITING:
            self.state = STATE_VIEWING
            self.editing_id = None

    def refresh(self, shifts, shift_filter=None):
        """コレクション変更後に選択日の表示を再計算する"""
        if not self.is_open:
            return
        selection = select_day(self.selection.day, shifts, shift_filter)
        if selection.is_empty:
            self.close()
            return
        self.selection = selection
        if self.editing_id and not any(s.id == self.editing_id for s in selection.shifts):
            self.end_edit()

    def close(self):
        self.state = STATE_CLOSED
        self.selection = None
        self.editing_id = None

    def to_dict(self):
        data = {
            "state": self.state,
            "editing_id": self.editing_id,
        }
        if self.selection:
            data.update(self.selection.to_dict())
        return data
