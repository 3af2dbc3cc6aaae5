from flask import request, jsonify
from . import transfer_bp
from services import transfer_service
from errors import ValidationError

@transfer_bp.route('/export', methods=['GET'])
def export_data():
    return jsonify(transfer_service.export_data())

@transfer_bp.route('/import', methods=['POST'])
def import_data():
    payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError("Invalid JSON format")
    counts = transfer_service.import_data(payload)
    return jsonify({'status': 'success', **counts})
