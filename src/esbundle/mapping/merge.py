"""매핑 본문 병합."""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from typing import Any


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """두 dict를 재귀적으로 병합한 새 dict를 반환.

    같은 키에서 양쪽이 모두 dict면 재귀 병합하고, 아니면 override 값으로 교체합니다.
    리스트도 통째로 교체됩니다. 입력은 변경하지 않습니다.

    예: {"settings": {"shards": 1, "replicas": 1}} + {"settings": {"replicas": 2}}
        -> {"settings": {"shards": 1, "replicas": 2}}
    """
    out = copy.deepcopy(dict(base))
    for key, value in override.items():
        current = out.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            out[key] = deep_merge(current, value)
        else:
            out[key] = copy.deepcopy(value)
    return out


def merge_all(bodies: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """순서대로 deep_merge. 뒤의 본문이 이깁니다."""
    merged: dict[str, Any] = {}
    for body in bodies:
        merged = deep_merge(merged, body)
    return merged
