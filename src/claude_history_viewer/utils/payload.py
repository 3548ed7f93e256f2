"""Convert result types into JSON-compatible payloads for the GUI boundary."""

import dataclasses
from typing import Any


def to_payload(value: Any) -> Any:
    """Recursively turn dataclasses (and lists of them) into plain dicts."""
    if isinstance(value, (list, tuple)):
        return [to_payload(v) for v in value]
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: to_payload(getattr(value, f.name))
            for f in dataclasses.fields(value)
        }
    return value
