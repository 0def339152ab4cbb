from flask import request


def json_body() -> dict:
    """Body JSON berupa object; array/angka/string dianggap body kosong."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def text_value(value) -> str:
    """Nilai skalar JSON jadi string ter-strip; None, list dan dict jadi ''."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def raw_text(value) -> str:
    # Untuk password/HTML: hanya string yang diterima, tanpa strip
    return value if isinstance(value, str) else ""
