# -*- coding: utf-8 -*-
"""
アプリケーション設定
"""

import os
from pathlib import Path

# .envファイルを読み込み
from dotenv import load_dotenv
load_dotenv()

# 基本設定
BASE_DIR = Path(__file__).parent
DATA_DIR = Path(os.environ.get('DATA_DIR', BASE_DIR / 'data'))
SHIFTS_FILE = DATA_DIR / 'shifts.json'

# 保存キー（Firestoreのドキュメント名 / JSONのトップレベルキー）
STORAGE_KEY = 'shiftmaster_shifts'
STORAGE_COLLECTION = 'app_state'

# Google Cloud Project ID（未設定ならFirestoreは使わない）
GOOGLE_CLOUD_PROJECT = os.environ.get('GOOGLE_CLOUD_PROJECT', '')

# Flask設定
SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')

# シフトの永続化（ローカルJSON / Firestore へのミラー）
PERSIST_SHIFTS = os.environ.get('PERSIST_SHIFTS', '1').lower() not in ('0', 'false', 'no', 'off')

# ログ設定
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'

# Firebase設定
FIREBASE_KEY_FILE = os.environ.get('FIREBASE_KEY_FILE', 'firebase-key.json')

# Firestore設定
FIRESTORE_AVAILABLE = False
try:
    # GOOGLE_CLOUD_PROJECTが設定されているか、キーファイルがあればFirestoreを有効化
    if GOOGLE_CLOUD_PROJECT or Path(FIREBASE_KEY_FILE).exists():
        from google.cloud import firestore  # noqa: F401
        FIRESTORE_AVAILABLE = True
except ImportError:
    pass

# 時刻フォーマット（24時間表記 HH:MM）
TIME_PATTERN = r'^([01]\d|2[0-3]):([0-5]\d)$'

# 勤務場所
LOCATIONS = ('On-site', 'Remote')
DEFAULT_LOCATION = 'On-site'

# エリアごとの勤務可能スタッフ
AREA_WORKER_MAP = {
    "Office": ["Alice Smith", "Charlie Brown", "Edward Davis"],
    "Factory": ["Bob Johnson", "Grace Wilson"],
    "Warehouse": ["Frank Miller", "Ivy Garcia"],
    "Support": ["Diana Prince", "Henry Rodriguez"],
    "Remote": ["Judy Taylor", "Kevin Anderson"],
}
