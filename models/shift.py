# -*- coding: utf-8 -*-
"""
シフトのデータ定義
"""

import uuid
from dataclasses import dataclass, replace
from datetime import date
from typing import Optional


class ShiftNotFoundError(LookupError):
    """指定IDのシフトが存在しない"""

    def __init__(self, shift_id):
        super().__init__(f"シフトが見つかりません: {shift_id}")
        self.shift_id = shift_id


def new_shift_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Shift:
    """1人のスタッフの1日分の勤務"""
    id: str
    date: date
    worker: str
    area: str
    start_time: str
    end_time: str
    location: str
    comments: Optional[str] = None

    def with_changes(self, **changes) -> "Shift":
        # idは変更しない
        changes.pop('id', None)
        return replace(self, **changes)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "worker": self.worker,
            "area": self.area,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "location": self.location,
            "comments": self.comments,
        }
