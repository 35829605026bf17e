from __future__ import annotations
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from review_agent.llm import LLMConfig

CONFIG_FILE = ".review.yaml"

@dataclass(frozen=True)
class ReviewConfig:
  llm: LLMConfig = field(default_factory=LLMConfig)
  default_branch: str = "main"
  additional_prompt: str | None = None
  log_dir: str | None = None

def _opt(data: dict[str, Any], key: str, types: tuple[type, ...]) -> Any:
  value = data.get(key)
  if value is None:
    return None
  # bool is an int subclass
  if not isinstance(value, types) or (isinstance(value, bool) and bool not in types):
    raise ValueError(f"{key} must be {' or '.join(t.__name__ for t in types)}")
  return value

def parse_review_config(data: dict[str, Any]) -> ReviewConfig:
  if not isinstance(data, dict):
    raise ValueError("review config must be a mapping")
  defaults = ReviewConfig()
  temperature = _opt(data, "temperature", (int, float))
  llm = LLMConfig(
    model=str(_opt(data, "model", (str,)) or defaults.llm.model).strip(),
    temperature=float(temperature) if temperature is not None else None,
    max_tokens=_opt(data, "max_tokens", (int,)),
    reasoning_effort=_opt(data, "reasoning_effort", (str,)),
  )
  return ReviewConfig(
    llm=llm,
    default_branch=str(_opt(data, "default_branch", (str,)) or defaults.default_branch).strip(),
    additional_prompt=_opt(data, "additional_prompt", (str,)),
    log_dir=_opt(data, "log_dir", (str,)),
  )

def load_review_config(repo: Path, path: Path | None = None) -> ReviewConfig:
  """Read the YAML review config; without an explicit path a missing repo file means defaults."""
  if path is None:
    path = repo / CONFIG_FILE
    if not path.exists():
      return ReviewConfig()
  elif not path.exists():
    raise FileNotFoundError(f"Missing review config: {path}")
  data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
  return parse_review_config(data)

def apply_overrides(cfg: ReviewConfig, model: str | None = None, base: str | None = None,
                    prompt: str | None = None, log_dir: str | None = None) -> ReviewConfig:
  if model:
    cfg = replace(cfg, llm=replace(cfg.llm, model=model))
  if base:
    cfg = replace(cfg, default_branch=base)
  if prompt:
    cfg = replace(cfg, additional_prompt=prompt)
  if log_dir:
    cfg = replace(cfg, log_dir=log_dir)
  return cfg
