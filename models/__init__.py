# -*- coding: utf-8 -*-
"""
モデル（データ管理）
"""

from .shift import Shift, ShiftNotFoundError, new_shift_id
from .roster import (
    all_areas,
    all_workers,
    workers_for,
    is_valid_pair,
    resolve_worker,
)
from .shift_store import (
    ShiftStore,
    sort_shifts,
    add_shifts,
    replace_shift,
    delete_shift,
    find_shift,
)
from .data_store import (
    ShiftLoadError,
    get_firestore_client,
    parse_date,
    serialize_shifts,
    deserialize_shifts,
    try_load_shifts,
    load_shifts,
    save_shifts,
)
