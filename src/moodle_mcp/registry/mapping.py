"""Wire-path assignment used by tool field maps.

A wire path is a dot-separated list of keys; integer segments index into
sequences. ``criteria.0.key`` assigns into ``{"criteria": [{"key": ...}]}``.
The empty path spreads a mapping into the root.
"""

from typing import Any

SPREAD = ""


def default_wire_name(field_name: str) -> str:
    """Remote API naming for a python field: underscores dropped.

    ``course_id`` -> ``courseid``, ``include_disabled`` -> ``includedisabled``.
    """
    return field_name.replace("_", "")


def assign_wire_path(params: dict[str, Any], path: str, value: Any) -> None:
    """Assign ``value`` into ``params`` at ``path``, creating containers.

    Args:
        params: Parameter mapping being built (mutated)
        path: Dotted wire path, or "" to merge a mapping into the root
        value: Value to place

    Raises:
        TypeError: If spreading a non-mapping, or the path crosses a scalar
    """
    if path == SPREAD:
        if not isinstance(value, dict):
            msg = f"Only a mapping can be spread into the root, got {type(value).__name__}"
            raise TypeError(msg)
        params.update(value)
        return

    keys: list[str | int] = [int(k) if k.isdigit() else k for k in path.split(".")]
    node: Any = params
    for key, next_key in zip(keys, keys[1:]):
        child: Any = [] if isinstance(next_key, int) else {}
        if isinstance(key, int):
            _pad(node, key)
            if node[key] is None:
                node[key] = child
        else:
            node.setdefault(key, child)
        node = node[key]
        if not isinstance(node, (dict, list)):
            msg = f"Wire path '{path}' crosses a scalar at '{key}'"
            raise TypeError(msg)

    last = keys[-1]
    if isinstance(last, int):
        _pad(node, last)
    node[last] = value


def _pad(node: list[Any], index: int) -> None:
    while len(node) <= index:
        node.append(None)


def nest_fields(prefix: str, *field_names: str) -> dict[str, str]:
    """Field map entries placing each field under ``prefix``.

    ``nest_fields("courses.0", "full_name")`` -> ``{"full_name": "courses.0.fullname"}``
    """
    return {name: f"{prefix}.{default_wire_name(name)}" for name in field_names}
