# -*- coding: utf-8 -*-
"""
ShiftMaster シフト登録・カレンダーアプリ
Flask + openpyxl + reportlab
（ローカルJSON / Firestore へのミラー対応）
"""

import logging

from flask import Flask

import config
from models import ShiftStore, load_shifts, save_shifts
from services import ScheduleSession
from routes import main_bp, api_bp

EXTENSION_KEY = 'shiftmaster'


def create_app(overrides=None):
    app = Flask(__name__)
    app.secret_key = config.SECRET_KEY
    app.config['PERSIST_SHIFTS'] = config.PERSIST_SHIFTS
    app.json.ensure_ascii = False
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    if app.config['PERSIST_SHIFTS']:
        store = ShiftStore(load_shifts(), on_change=save_shifts)
    else:
        store = ShiftStore()
    app.extensions[EXTENSION_KEY] = ScheduleSession(store)

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)
    return app


if __name__ == '__main__':
    create_app().run(debug=True, port=5000)
