from flask import jsonify
from capstone.utils.errors import status_code_for


def respond(result, success_status=200):
    """JSON response for a service result, with the status its error kind maps to"""
    if not result.get('success'):
        return jsonify(result), status_code_for(result)
    return jsonify(result), success_status
