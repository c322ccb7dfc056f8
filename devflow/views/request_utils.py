from flask import request

from devflow.errors import ValidationError


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def optional_json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def user_id_from(data: dict, required: bool = True):
    user_id = data.get("user_id")
    if user_id is None:
        if required:
            raise ValidationError("user_id is required.")
        return None
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise ValidationError("user_id must be an integer.")
    return user_id
