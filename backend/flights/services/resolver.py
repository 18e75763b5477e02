from collections.abc import Mapping, Sequence


def _walk(record, path: str):
    """Follow a dotted path through mappings and list indexes. Missing steps yield None."""
    current = record
    for key in path.split("."):
        if isinstance(current, Mapping):
            if key not in current:
                return None
            current = current[key]
        elif isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
            if not key.isdigit() or int(key) >= len(current):
                return None
            current = current[int(key)]
        else:
            return None
    return current


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def resolve(record, candidate_paths, fallback=None):
    """
    Return the first non-blank value found under `candidate_paths`, tried in order.

    A blank value is None or "". Falsy values such as 0 and False are real answers.
    """
    for path in candidate_paths:
        value = _walk(record, path)
        if not is_blank(value):
            return value
    return fallback
