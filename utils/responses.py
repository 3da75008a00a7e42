"""
JSON envelope helpers for the API blueprints.

Success responses look like ``{"status": "success", "data": {...}}``; list
responses add ``"results"`` with the number of items.
"""
from flask import jsonify

from utils.errors import ValidationFailedError


def success(data=None, status_code=200, results=None):
    body = {'status': 'success', 'data': data}
    if results is not None:
        body['results'] = results
    return jsonify(body), status_code


def no_content():
    return '', 204


def validate_form(form):
    """Run *form* validation, raising ValidationFailedError with the first message."""
    if form.validate():
        return form
    for field_name, messages in form.errors.items():
        if messages:
            label = getattr(form, field_name).label.text if hasattr(form, field_name) else field_name
            raise ValidationFailedError(f'Validation error: {label}: {messages[0]}')
    raise ValidationFailedError()


def supplied_fields(form, mapping):
    """Return ``{service_name: value}`` for every form field the client sent.

    *mapping* maps form field names to service keyword names.  Fields absent
    from the request body, or sent as null, are left out so partial updates
    keep old values.
    """
    fields = {}
    for form_name, service_name in mapping.items():
        field = getattr(form, form_name)
        if field.raw_data and field.raw_data[0] is not None:
            fields[service_name] = field.data
    return fields
