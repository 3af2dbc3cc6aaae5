from flask import Blueprint

habits_bp = Blueprint('habits', __name__)
history_bp = Blueprint('history', __name__)
transfer_bp = Blueprint('transfer', __name__)

from . import habits, history, transfer
