from typing import Any

# ----------------------------
# Document path helpers
# ----------------------------


def _split(key: str) -> list[str]:
    return key.split(".")


def dedot(key: str) -> str:
    return key.replace(".", "_")


def get_value(doc: dict[str, Any], key: str) -> Any:
    """
    Read a dot-delimited path. Returns None when any segment is missing.
    """
    current: Any = doc
    for part in _split(key):
        if not isinstance(current, dict) or part not in current:
            return None
        current = current[part]
    return current


def put(doc: dict[str, Any], key: str, value: Any) -> None:
    """
    Set a dot-delimited path, creating intermediate dicts.
    A scalar found on the way is replaced.
    """
    parts = _split(key)
    current = doc
    for part in parts[:-1]:
        nxt = current.get(part)
        if not isinstance(nxt, dict):
            nxt = {}
            current[part] = nxt
        current = nxt
    current[parts[-1]] = value


def safe_put(doc: dict[str, Any], key: str, value: Any) -> None:
    """
    Like put(), but an existing scalar on the path is kept under "value"
    instead of being overwritten.
    """
    parts = _split(key)
    current = doc
    for part in parts[:-1]:
        nxt = current.get(part)
        if nxt is None:
            nxt = {}
            current[part] = nxt
        elif not isinstance(nxt, dict):
            nxt = {"value": nxt}
            current[part] = nxt
        current = nxt

    last = parts[-1]
    existing = current.get(last)
    if isinstance(existing, dict) and not isinstance(value, dict):
        existing["value"] = value
    else:
        current[last] = value


def delete(doc: dict[str, Any], key: str) -> bool:
    parts = _split(key)
    parent = get_value(doc, ".".join(parts[:-1])) if len(parts) > 1 else doc
    if not isinstance(parent, dict) or parts[-1] not in parent:
        return False
    del parent[parts[-1]]
    return True


# ----------------------------
# Deep merge
# ----------------------------


def _copy_tree(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _copy_tree(v) for k, v in value.items()}
    return value


def deep_update(dst: dict[str, Any], src: dict[str, Any] | None) -> dict[str, Any]:
    """
    Recursively merge src into dst in place.
    Nested dicts recurse; anything else overwrites (last write wins).
    """
    if not src:
        return dst
    for key, value in src.items():
        current = dst.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            deep_update(current, value)
        else:
            dst[key] = _copy_tree(value)
    return dst


def merge(base: dict[str, Any] | None, top: dict[str, Any] | None) -> dict[str, Any]:
    """
    Pure form of deep_update(): top wins, neither input is modified.
    """
    out = _copy_tree(base or {})
    return deep_update(out, top)
