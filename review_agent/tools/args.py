from __future__ import annotations
import json
from typing import Any


def decode_args(raw: str) -> dict[str, Any]:
  data = json.loads(raw or "{}")
  if not isinstance(data, dict):
    raise ValueError(f"expected a JSON object, got {type(data).__name__}")
  return data


def get_str(data: dict[str, Any], key: str, required: bool = False) -> str | None:
  value = data.get(key)
  if value is None:
    if required:
      raise ValueError(f"missing field `{key}`")
    return None
  if not isinstance(value, str):
    raise ValueError(f"`{key}` must be a string")
  return value


def get_int(data: dict[str, Any], key: str) -> int | None:
  value = data.get(key)
  if value is None:
    return None
  # bool is an int subclass
  if isinstance(value, bool) or not isinstance(value, int):
    raise ValueError(f"`{key}` must be an integer")
  if value < 0:
    raise ValueError(f"`{key}` must not be negative")
  return value


def get_bool(data: dict[str, Any], key: str) -> bool | None:
  value = data.get(key)
  if value is None:
    return None
  if not isinstance(value, bool):
    raise ValueError(f"`{key}` must be a boolean")
  return value
