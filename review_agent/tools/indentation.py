from __future__ import annotations
from dataclasses import dataclass

TAB_WIDTH = 4


@dataclass(frozen=True)
class IndentationOptions:
  anchor_line: int = 1
  max_levels: int = 0          # 0 = unlimited
  include_siblings: bool = False
  include_header: bool = True
  max_lines: int | None = None


def is_blank(line: str) -> bool:
  return not line.strip()


def line_indent(line: str) -> int:
  width = 0
  for ch in line:
    if ch == "\t":
      width += TAB_WIDTH
    elif ch.isspace():
      width += 1
    else:
      break
  return width


def resolve_anchor(lines: list[str], anchor_line: int) -> int:
  """Clamp a 1-based anchor into the file and move it off blank lines, backward first."""
  index = min(max(anchor_line, 1), len(lines)) - 1
  if not is_blank(lines[index]):
    return index
  for i in range(index - 1, -1, -1):
    if not is_blank(lines[i]):
      return i
  for i in range(index + 1, len(lines)):
    if not is_blank(lines[i]):
      return i
  return index


def opens_block(lines: list[str], index: int) -> bool:
  """True when the next non-blank line is indented deeper than lines[index]."""
  indent = line_indent(lines[index])
  for line in lines[index + 1:]:
    if not is_blank(line):
      return line_indent(line) > indent
  return False


def _is_boundary(indent: int, base_indent: int, include_siblings: bool) -> bool:
  if include_siblings:
    return indent < base_indent
  return indent <= base_indent


def scan_up(lines: list[str], anchor: int, base_indent: int, include_siblings: bool) -> int:
  """First line of the block above the anchor.

  The boundary line is kept when it encloses the anchor (shallower), or when
  deeper lines were passed on the way and the anchor closes rather than opens a
  block. Otherwise the block starts at the anchor itself. With siblings and no
  enclosing line the block starts at the first non-blank line of the file.
  """
  absorbed = False
  top = anchor
  idx = anchor
  while idx > 0:
    idx -= 1
    line = lines[idx]
    if is_blank(line):
      continue
    indent = line_indent(line)
    if not _is_boundary(indent, base_indent, include_siblings):
      absorbed = absorbed or indent > base_indent
      top = idx
      continue
    if indent < base_indent or (absorbed and not opens_block(lines, anchor)):
      return idx
    return anchor
  return top if include_siblings else anchor


def scan_down(lines: list[str], anchor: int, base_indent: int, include_siblings: bool) -> int:
  idx = anchor + 1
  while idx < len(lines):
    line = lines[idx]
    if not is_blank(line) and _is_boundary(line_indent(line), base_indent, include_siblings):
      return idx - 1
    idx += 1
  return len(lines) - 1


def expand_levels(lines: list[str], start: int, current: int, levels: int, max_levels: int) -> tuple[int, int]:
  """Climb enclosing levels above start.

  Each strict decrease of indentation is one level; max_levels == 0 climbs to
  the outermost one. Returns the new start and the indentation of the last
  level taken in.
  """
  idx = start
  while idx > 0:
    idx -= 1
    line = lines[idx]
    if is_blank(line):
      continue
    indent = line_indent(line)
    if indent < current:
      levels += 1
      if max_levels and levels > max_levels:
        return idx + 1, current
      current = indent
      start = idx
  return start, current


def close_level(lines: list[str], end: int, level_indent: int) -> int:
  """Extend end over lines deeper than level_indent plus one closing line at that indent."""
  idx = end + 1
  while idx < len(lines) and (is_blank(lines[idx]) or line_indent(lines[idx]) > level_indent):
    idx += 1
  if idx >= len(lines) or line_indent(lines[idx]) < level_indent or opens_block(lines, idx):
    return max(end, idx - 1)
  return idx


def find_header_end(lines: list[str]) -> int:
  """Number of leading lines up to and including the first blank line after content."""
  seen_content = False
  end = 0
  for i, line in enumerate(lines):
    end = i + 1
    if is_blank(line):
      if seen_content:
        break
    else:
      seen_content = True
  return end


def extract_block(lines: list[str], options: IndentationOptions) -> tuple[int, int] | None:
  """Return the inclusive 0-based (start, end) range of the block around the anchor."""
  if not lines:
    return None

  anchor = resolve_anchor(lines, options.anchor_line)
  base_indent = line_indent(lines[anchor])

  start = scan_up(lines, anchor, base_indent, options.include_siblings)
  end = scan_down(lines, anchor, base_indent, options.include_siblings)

  # an enclosing line kept by the scan counts as the first level
  current, levels = base_indent, 0
  if line_indent(lines[start]) < base_indent:
    current, levels = line_indent(lines[start]), 1
  closes = not options.include_siblings and start < anchor and current == base_indent
  start, current = expand_levels(lines, start, current, levels, options.max_levels)
  if closes and current == base_indent:
    # the anchor closes the outermost level taken in
    end = anchor
  else:
    end = close_level(lines, end, current)

  while start < anchor and is_blank(lines[start]):
    start += 1
  while end > anchor and is_blank(lines[end]):
    end -= 1

  if options.include_header:
    header_end = find_header_end(lines)
    if header_end < start:
      start = header_end

  if end < start:
    end = start

  if options.max_lines is not None:
    end = min(end, start + max(options.max_lines, 1) - 1)

  return start, end
