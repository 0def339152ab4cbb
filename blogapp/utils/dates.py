def to_iso(value):
    return value.isoformat() if value else None
