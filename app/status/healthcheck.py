from flask import Blueprint, jsonify
from sqlalchemy import text

from app import db

status_blueprint = Blueprint('status', __name__)


@status_blueprint.route('/', methods=['GET'])
@status_blueprint.route('/_status', methods=['GET', 'POST'])
def show_status():
    db.session.execute(text('SELECT 1'))
    return jsonify(status='ok'), 200
