from __future__ import annotations
import fnmatch
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from review_agent.tools.args import get_str
from review_agent.tools.formatting import format_search_results, format_tool_error, split_lines, truncate_line

MAX_SEARCH_MATCHES = 50
SEARCH_CONTEXT_LINES = 1
# version-control metadata and build output; never descended into
PRUNED_DIRS = {".git", ".hg", ".svn", "target", "__pycache__"}


@dataclass(frozen=True)
class SearchArgs:
  path: str
  regex: str
  file_pattern: str | None = None


@dataclass(frozen=True)
class SearchMatch:
  path: str
  line_number: int
  context: list[str]


def parse_search_args(data: dict[str, Any]) -> SearchArgs:
  return SearchArgs(
    path=get_str(data, "path", required=True),
    regex=get_str(data, "regex", required=True),
    file_pattern=get_str(data, "file_pattern"),
  )


def _walk_files(root: str) -> Iterator[str]:
  for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
    dirnames[:] = sorted(d for d in dirnames if d not in PRUNED_DIRS)
    for name in sorted(filenames):
      path = os.path.join(dirpath, name)
      if os.path.islink(path):
        continue
      yield path


def _matches_glob(path: str, root: str, pattern: str) -> bool:
  rel = Path(os.path.relpath(path, root)).as_posix()
  candidates = (rel, Path(path).as_posix(), os.path.basename(path))
  return any(fnmatch.fnmatchcase(c, pattern) for c in candidates)


def _read_lines(path: str) -> list[str] | None:
  try:
    with open(path, "r", encoding="utf-8") as f:
      text = f.read()
  except (OSError, UnicodeDecodeError):
    return None
  if "\x00" in text:
    return None
  return split_lines(text)


def _context(lines: list[str], index: int) -> list[str]:
  before = max(index - SEARCH_CONTEXT_LINES, 0)
  after = min(index + SEARCH_CONTEXT_LINES + 1, len(lines))
  out = []
  for i in range(before, after):
    marker = ">" if i == index else " "
    out.append(f"{marker} {i + 1:>6}| {truncate_line(lines[i])}")
  return out


def search_files(args: SearchArgs) -> str:
  root = args.path
  if not os.path.exists(root):
    return format_tool_error("search_files", f"Search path does not exist: {root}")
  if not os.path.isdir(root):
    return format_tool_error("search_files", f"Search path is not a directory: {root}")

  try:
    regex = re.compile(args.regex)
  except re.error as e:
    return format_tool_error("search_files", f"Invalid regex: {e}")

  file_pattern = args.file_pattern if args.file_pattern and args.file_pattern.strip() else None

  matches: list[SearchMatch] = []
  total_matches = 0
  for path in _walk_files(root):
    if file_pattern and not _matches_glob(path, root, file_pattern):
      continue
    lines = _read_lines(path)
    if lines is None:
      continue

    for index, line in enumerate(lines):
      if not regex.search(line):
        continue
      total_matches += 1
      if total_matches > MAX_SEARCH_MATCHES:
        break
      matches.append(SearchMatch(path=path, line_number=index + 1, context=_context(lines, index)))

    if total_matches >= MAX_SEARCH_MATCHES:
      break

  return format_search_results(root, args.regex, file_pattern, matches,
                               truncated=total_matches >= MAX_SEARCH_MATCHES)
