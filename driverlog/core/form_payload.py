"""Form Payload: rebuilds nested submission objects from bracketed form keys.

Invariants:
    - "stops[0][location]=Field" becomes {"stops": [{"location": "Field"}]}
    - A level whose keys are all non-negative integers becomes a list ordered
      by index; gaps are closed up
    - A key that does not have the name[part][part] shape is kept literally
    - A repeated key keeps its last value
    - Pure: operates on already-decoded (key, value) pairs
"""

import re
from collections.abc import Iterable
from typing import Any

_KEY_SHAPE = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])+)$")
_KEY_PART = re.compile(r"\[([^\[\]]*)\]")


def split_form_key(key: str) -> list[str]:
    match = _KEY_SHAPE.match(key)
    if not match:
        return [key]
    return [match.group(1), *_KEY_PART.findall(match.group(2))]


def _listify(node: Any) -> Any:
    if not isinstance(node, dict):
        return node
    children = {key: _listify(value) for key, value in node.items()}
    if children and all(key.isdigit() for key in children):
        return [children[key] for key in sorted(children, key=int)]
    return children


def unflatten_form(pairs: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Nest bracketed form fields into the object shape a JSON body would have."""
    root: dict[str, Any] = {}
    for key, value in pairs:
        path = split_form_key(key)
        node = root
        for part in path[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[path[-1]] = value
    return _listify(root)
