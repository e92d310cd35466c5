# -*- coding: utf-8 -*-
"""
ルーティング
"""

from .main import main_bp
from .api import api_bp
