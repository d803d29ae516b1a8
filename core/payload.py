from typing import Any


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def build_payload(action: str, client_key: str, **fields: Any) -> dict[str, Any]:
    """Build the `{"data": {...}}` body the SendForSign API expects.

    Empty top-level fields of `data` are dropped; nested objects are sent as given.
    """
    data: dict[str, Any] = {"clientKey": client_key, "action": action}
    data.update(fields)
    return {"data": {k: v for k, v in data.items() if not _is_empty(v)}}
