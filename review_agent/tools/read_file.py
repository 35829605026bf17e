from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from review_agent.tools.args import get_bool, get_int, get_str
from review_agent.tools.formatting import format_file_output, format_tool_error, number_line, split_lines
from review_agent.tools.indentation import IndentationOptions, extract_block

DEFAULT_READ_LIMIT = 2000
MAX_READ_LIMIT = 2000
READ_MODES = ("slice", "indentation")


@dataclass(frozen=True)
class ReadArgs:
  path: str
  mode: str = "slice"
  offset: int = 1
  limit: int = DEFAULT_READ_LIMIT
  indentation: IndentationOptions = field(default_factory=IndentationOptions)


def parse_read_args(data: dict[str, Any]) -> ReadArgs:
  path = get_str(data, "path", required=True)
  mode = get_str(data, "mode") or "slice"
  if mode not in READ_MODES:
    raise ValueError(f"unknown mode `{mode}`, expected one of: {', '.join(READ_MODES)}")
  offset = get_int(data, "offset")
  limit = get_int(data, "limit")

  raw_opts = data.get("indentation")
  if raw_opts is None:
    raw_opts = {}
  if not isinstance(raw_opts, dict):
    raise ValueError("`indentation` must be an object")
  anchor_line = get_int(raw_opts, "anchor_line")
  max_levels = get_int(raw_opts, "max_levels")
  include_siblings = get_bool(raw_opts, "include_siblings")
  include_header = get_bool(raw_opts, "include_header")
  opts = IndentationOptions(
    anchor_line=max(anchor_line if anchor_line is not None else 1, 1),
    max_levels=max_levels or 0,
    include_siblings=bool(include_siblings),
    include_header=True if include_header is None else include_header,
    max_lines=get_int(raw_opts, "max_lines"),
  )

  return ReadArgs(
    path=path,
    mode=mode,
    offset=max(offset if offset is not None else 1, 1),
    limit=min(limit if limit is not None else DEFAULT_READ_LIMIT, MAX_READ_LIMIT),
    indentation=opts,
  )


def read_file(args: ReadArgs) -> str:
  # ValueError: undecodable bytes or a NUL byte in the path
  try:
    contents = Path(args.path).read_text(encoding="utf-8")
  except (OSError, ValueError) as e:
    return format_tool_error("read_file", f"Failed to read {args.path}: {e}")

  lines = split_lines(contents)
  if args.mode == "indentation":
    return read_file_indentation(args.path, lines, args.indentation)
  return read_file_slice(args.path, lines, args.offset, args.limit)


def read_file_slice(path: str, lines: list[str], offset: int, limit: int) -> str:
  start = offset - 1
  if start >= len(lines):
    return format_file_output(path, [])
  end = min(start + limit, len(lines))
  numbered = [number_line(i + 1, lines[i]) for i in range(start, end)]
  return format_file_output(path, numbered)


def read_file_indentation(path: str, lines: list[str], options: IndentationOptions) -> str:
  block = extract_block(lines, options)
  if block is None:
    return format_file_output(path, [])
  start, end = block
  numbered = [number_line(i + 1, lines[i]) for i in range(start, end + 1)]
  return format_file_output(path, numbered)
