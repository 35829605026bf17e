from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from datetime import datetime
import json
import re

@dataclass
class RunLog:
  root: Path  # .../logs/review_<branch>/<timestamp>/
  step: int = field(default=0)

  def _next_path(self, name: str) -> Path:
    p = self.root / f"{self.step:02d}_{name}"
    self.step += 1
    return p

  def write_text(self, name: str, text: str) -> None:
    self._next_path(name).write_text(text, encoding="utf-8")

  def write_json(self, name: str, obj) -> None:
    self._next_path(name).write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")

def make_run_log_dir(logs_root: Path, label: str) -> RunLog:
  ts = datetime.now().strftime("%Y%m%d_%H%M%S")
  safe_label = re.sub(r"[^A-Za-z0-9._-]+", "_", label) or "run"
  run_root = logs_root / f"review_{safe_label}" / ts
  run_root.mkdir(parents=True, exist_ok=True)
  return RunLog(root=run_root)
