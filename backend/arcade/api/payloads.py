from flask import request

from arcade.errors import ValidationError


def json_object() -> dict:
    """Request body as a dict; a missing body reads as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
