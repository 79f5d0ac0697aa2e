import json


def read_payload(request):
    """
    Request data for JSON or form-encoded POSTs.
    Returns None when a JSON body cannot be decoded.
    """
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except (ValueError, UnicodeDecodeError):
            return None
        return data if isinstance(data, dict) else None

    return request.POST


def form_errors(form):
    """Field errors keyed by field, with the field label prefixed."""
    formatted_errors = {}
    for field, errors in form.errors.items():
        if field == "__all__":
            formatted_errors["general"] = [str(e) for e in errors]
        else:
            field_label = str(form.fields[field].label or field.replace("_", " ").title())
            formatted_errors[field] = [
                f"{field_label}: {error}" if not str(error).startswith(field_label) else str(error)
                for error in errors
            ]
    return formatted_errors
