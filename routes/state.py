# -*- coding: utf-8 -*-
"""
アプリに紐づく画面状態の取得
"""

from flask import current_app


def get_session():
    return current_app.extensions['shiftmaster']
