from __future__ import annotations
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
  from review_agent.tools.search_files import SearchMatch

MAX_LINE_LENGTH = 2000
NO_LINES_MARKER = "(no lines in range)"


def split_lines(text: str) -> list[str]:
  """Split on newlines only, so numbering follows physical lines (form feeds stay in place)."""
  lines = text.split("\n")
  if lines[-1] == "":
    lines.pop()
  return [line[:-1] if line.endswith("\r") else line for line in lines]


def truncate_line(line: str) -> str:
  if len(line) <= MAX_LINE_LENGTH:
    return line
  return line[:MAX_LINE_LENGTH] + "..."


def number_line(line_number: int, line: str) -> str:
  return f"{line_number:>6}| {truncate_line(line)}"


def format_file_output(path: str, lines: list[str]) -> str:
  out = [f"FILE: {path}"]
  if not lines:
    out.append(NO_LINES_MARKER)
  else:
    out.extend(lines)
  return "\n".join(out) + "\n"


def format_search_results(root: str, regex: str, file_pattern: str | None,
                          matches: Sequence[SearchMatch], truncated: bool) -> str:
  out = [f"SEARCH ROOT: {root}", f"REGEX: {regex}"]
  if file_pattern:
    out.append(f"FILE_PATTERN: {file_pattern}")

  if not matches:
    out.append("No matches found.")
    return "\n".join(out) + "\n"

  for m in matches:
    out.append("")
    out.append(f"{m.path}:{m.line_number}")
    out.extend(m.context)

  if truncated:
    out.append("")
    out.append("Matches truncated at limit.")
  return "\n".join(out) + "\n"


def format_tool_error(tool: str, message: str) -> str:
  return f"ERROR ({tool}): {message}\n"
