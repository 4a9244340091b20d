"""
Request helpers shared by the API blueprints
"""

from flask import request

from services.errors import ValidationFailure


def get_json_payload():
    """
    Return the JSON object sent with the request.

    An empty body is an empty payload. A body that is not valid JSON is a
    ValidationFailure rather than an empty patch.
    """
    if not request.get_data(cache=True):
        return {}

    data = request.get_json(silent=True)
    if data is None:
        raise ValidationFailure("Request body must be valid JSON")
    return data


def get_query_filters():
    """Query string as a dict, blank parameters dropped"""
    return {key: value for key, value in request.args.items() if value.strip()}
