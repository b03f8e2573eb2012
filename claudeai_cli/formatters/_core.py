"""Core output dispatchers."""

import json


def _jsonable(data):
    """Turn model records into plain JSON-ready values."""
    if hasattr(data, "to_dict"):
        return data.to_dict()
    if isinstance(data, list):
        return [_jsonable(item) for item in data]
    return data


def pretty_print(data):
    print(json.dumps(_jsonable(data), indent=2, ensure_ascii=False))


def output(data, formatter=None, fmt="json", csv_formatter=None):
    """Output data in requested format."""
    if fmt == "csv" and csv_formatter:
        print(csv_formatter(data))
    elif fmt == "table" and formatter:
        print(formatter(data))
    else:
        pretty_print(data)


def mutation_response(action, chat_id=None, details=None, data=None, fmt="json"):
    """Print a mutation confirmation."""
    if fmt == "json":
        payload = {
            "ok": True,
            "mutation": {
                "action": action,
                "chat_id": chat_id,
                "details": details,
            },
        }
        if data:
            payload["data"] = _jsonable(data)
        print(json.dumps(payload, ensure_ascii=False))
        return

    parts = [action]
    if chat_id:
        parts.append(f"chat {chat_id}")
    if details:
        parts.append(details)
    print(f"OK: {': '.join(parts)}")
