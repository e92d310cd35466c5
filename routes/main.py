# -*- coding: utf-8 -*-
"""
メインページルーティング
"""

from flask import Blueprint, render_template

from config import LOCATIONS
from models import all_areas, all_workers
from .state import get_session

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    session = get_session()
    # 初回表示時に基準日を今日に設定
    session.initialize()
    return render_template('index.html',
                           calendar=session.calendar(),
                           areas=all_areas(),
                           workers=all_workers(),
                           locations=LOCATIONS)
