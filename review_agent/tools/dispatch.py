from __future__ import annotations
from typing import Any, Callable

from review_agent.messages import ToolDeclaration
from review_agent.tools.args import decode_args
from review_agent.tools.formatting import format_tool_error
from review_agent.tools.read_file import parse_read_args, read_file
from review_agent.tools.search_files import parse_search_args, search_files

READ_FILE_DESCRIPTION = (
  "Read a file and return its contents with line numbers for diffing or discussion. "
  "This tool reads exactly one file per call; issue several calls for several files. "
  "Supports two modes: 'slice' (default) reads lines sequentially with offset/limit; "
  "'indentation' extracts a complete code block around an anchor line based on the "
  "indentation hierarchy. Use slice mode for initial exploration, configuration or data "
  "files, or a known line range. Prefer indentation mode when you have a line number from "
  "the diff or from search results: it returns the whole enclosing block instead of cutting "
  "a function in half. Indentation mode needs anchor_line to be useful. Returns up to 2000 "
  "lines per call; lines longer than 2000 characters are truncated. "
  "Example: { \"path\": \"src/app.py\" } "
  "Example (indentation mode): { \"path\": \"src/app.py\", \"mode\": \"indentation\", "
  "\"indentation\": { \"anchor_line\": 42 } }"
)

SEARCH_FILES_DESCRIPTION = (
  "Perform a regex search across files in a directory, returning each match with one line "
  "of surrounding context. Use it to find definitions, usages, TODO comments or to confirm "
  "a pattern. Results are capped at 50 matches, so prefer narrow patterns.\n\n"
  "Parameters:\n"
  "- path: (required) Directory to search recursively, relative to the repository root.\n"
  "- regex: (required) Regular expression to search for (Python `re` syntax), matched per line.\n"
  "- file_pattern: (optional) Glob to filter files (e.g. '*.py'). All files when omitted.\n\n"
  "Example: { \"path\": \"src\", \"regex\": \"def\\\\s+\\\\w+\", \"file_pattern\": \"*.py\" }"
)

READ_FILE_SCHEMA = {
  "type": "object",
  "properties": {
    "path": {"type": "string", "description": "Path to the file to read, relative to the repository root"},
    "mode": {
      "type": "string",
      "enum": ["slice", "indentation"],
      "description": "'slice' (default): read lines with offset/limit. 'indentation': extract the block around anchor_line.",
    },
    "offset": {"type": "integer", "description": "1-based line offset to start reading from (default 1)"},
    "limit": {"type": "integer", "description": "Maximum number of lines to return (default 2000)"},
    "indentation": {
      "type": "object",
      "description": "Indentation mode options. Only used when mode='indentation'.",
      "properties": {
        "anchor_line": {"type": "integer", "description": "1-based line number to anchor the extraction."},
        "max_levels": {"type": "integer", "description": "Maximum enclosing indentation levels to include above the anchor (0 = unlimited)."},
        "include_siblings": {"type": "boolean", "description": "Include sibling blocks at the same indentation level as the anchor."},
        "include_header": {"type": "boolean", "description": "Include the file header (imports, module comments) at the top of the output."},
        "max_lines": {"type": "integer", "description": "Hard cap on lines returned."},
      },
      "required": [],
      "additionalProperties": False,
    },
  },
  "required": ["path"],
  "additionalProperties": False,
}

SEARCH_FILES_SCHEMA = {
  "type": "object",
  "properties": {
    "path": {"type": "string", "description": "Directory to search recursively, relative to the repository root"},
    "regex": {"type": "string", "description": "Regular expression to match against each line"},
    "file_pattern": {"type": ["string", "null"], "description": "Optional glob limiting which files are searched (e.g. *.py)"},
  },
  "required": ["path", "regex"],
  "additionalProperties": False,
}


def tool_declarations() -> list[ToolDeclaration]:
  return [
    ToolDeclaration(name="read_file", description=READ_FILE_DESCRIPTION, parameters=READ_FILE_SCHEMA),
    ToolDeclaration(name="search_files", description=SEARCH_FILES_DESCRIPTION, parameters=SEARCH_FILES_SCHEMA),
  ]


# tool name -> (argument decoder, handler)
TOOLS: dict[str, tuple[Callable[[dict[str, Any]], Any], Callable[[Any], str]]] = {
  "read_file": (parse_read_args, read_file),
  "search_files": (parse_search_args, search_files),
}


def dispatch(name: str, raw_args: str) -> str:
  """Run a tool call. Never raises: failures come back as ERROR text for the model to read."""
  tool = TOOLS.get(name)
  if tool is None:
    return format_tool_error(name, "Unknown tool name")
  parse, handler = tool
  try:
    args = parse(decode_args(raw_args))
  except ValueError as e:
    return format_tool_error(name, f"Invalid arguments: {e}")
  return handler(args)


def summarize_tool_call(name: str, raw_args: str) -> str:
  tool = TOOLS.get(name)
  if tool is None:
    return f"{name} (unknown tool)"
  try:
    args = tool[0](decode_args(raw_args))
  except ValueError:
    return f"{name} (invalid args)"

  if name == "read_file":
    if args.mode == "indentation":
      return f"read_file {args.path} (indentation anchor_line={args.indentation.anchor_line})"
    end = args.offset + max(args.limit - 1, 0)
    return f"read_file {args.path}:{args.offset}-{end}"
  if args.file_pattern and args.file_pattern.strip():
    return f"search_files {args.path} regex={args.regex} files={args.file_pattern}"
  return f"search_files {args.path} regex={args.regex}"
