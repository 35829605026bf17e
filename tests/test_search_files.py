import os

import pytest

from review_agent.tools.search_files import SearchArgs, parse_search_args, search_files


def _tree(root, files):
  for rel, text in files.items():
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")


def test_finds_match_with_context_and_marker(tmp_path):
  _tree(tmp_path, {
    "src/lib.rs": "use std::io;\nfn helper() {}\nfn main() {}\n",
    "README.md": "fn in docs\n",
  })

  out = search_files(SearchArgs(path=str(tmp_path), regex=r"fn helper", file_pattern="*.rs"))

  assert out.startswith(f"SEARCH ROOT: {tmp_path}\nREGEX: fn helper\nFILE_PATTERN: *.rs\n")
  assert f"{tmp_path / 'src' / 'lib.rs'}:2" in out
  assert "       1| use std::io;" in out
  assert ">      2| fn helper() {}" in out
  assert "       3| fn main() {}" in out
  assert "README.md" not in out


def test_context_is_clamped_at_file_edges(tmp_path):
  _tree(tmp_path, {"one.txt": "needle\n"})

  out = search_files(SearchArgs(path=str(tmp_path), regex="needle"))

  lines = out.splitlines()
  i = lines.index(f"{tmp_path / 'one.txt'}:1")
  assert lines[i + 1] == ">      1| needle"
  assert len(lines) == i + 2


def test_no_matches(tmp_path):
  _tree(tmp_path, {"a.py": "x = 1\n"})

  out = search_files(SearchArgs(path=str(tmp_path), regex="nothing here"))

  assert out == f"SEARCH ROOT: {tmp_path}\nREGEX: nothing here\nNo matches found.\n"


def test_pruned_directories_are_skipped(tmp_path):
  _tree(tmp_path, {
    ".git/config": "needle\n",
    "target/debug/out.txt": "needle\n",
    "pkg/__pycache__/mod.txt": "needle\n",
    "pkg/mod.py": "needle\n",
  })

  out = search_files(SearchArgs(path=str(tmp_path), regex="needle"))

  assert f"{tmp_path / 'pkg' / 'mod.py'}:1" in out
  assert ".git" not in out
  assert "target" not in out
  assert "__pycache__" not in out


def test_symlinked_files_are_not_followed(tmp_path):
  outside = tmp_path / "outside"
  root = tmp_path / "root"
  _tree(outside, {"secret.txt": "needle\n"})
  _tree(root, {"real.txt": "needle\n"})
  try:
    os.symlink(outside / "secret.txt", root / "link.txt")
    os.symlink(outside, root / "linkdir", target_is_directory=True)
  except (OSError, NotImplementedError):
    pytest.skip("symlinks not supported")

  out = search_files(SearchArgs(path=str(root), regex="needle"))

  assert "real.txt:1" in out
  assert "link.txt" not in out
  assert "linkdir" not in out


def test_results_are_capped(tmp_path):
  _tree(tmp_path, {"many.txt": "".join(f"hit {i}\n" for i in range(80))})

  out = search_files(SearchArgs(path=str(tmp_path), regex="hit"))

  assert out.count(f"{tmp_path / 'many.txt'}:") == 50
  assert out.rstrip("\n").endswith("Matches truncated at limit.")


def test_few_matches_are_not_marked_truncated(tmp_path):
  _tree(tmp_path, {"few.txt": "hit\nmiss\nhit\n"})

  out = search_files(SearchArgs(path=str(tmp_path), regex="hit"))

  assert "truncated" not in out


def test_walk_order_is_sorted(tmp_path):
  _tree(tmp_path, {"b.txt": "hit\n", "a.txt": "hit\n", "c/d.txt": "hit\n"})

  out = search_files(SearchArgs(path=str(tmp_path), regex="hit"))

  a = out.index("a.txt:1")
  b = out.index("b.txt:1")
  d = out.index("d.txt:1")
  assert a < b < d


def test_binary_and_undecodable_files_are_skipped(tmp_path):
  (tmp_path / "blob.bin").write_bytes(b"needle\x00\x01")
  (tmp_path / "latin.txt").write_bytes(b"needle \xff\xfe\n")
  _tree(tmp_path, {"ok.txt": "needle\n"})

  out = search_files(SearchArgs(path=str(tmp_path), regex="needle"))

  assert "ok.txt:1" in out
  assert "blob.bin" not in out
  assert "latin.txt" not in out


def test_glob_matches_relative_paths(tmp_path):
  _tree(tmp_path, {"src/a.py": "needle\n", "tests/b.py": "needle\n"})

  out = search_files(SearchArgs(path=str(tmp_path), regex="needle", file_pattern="src/*.py"))

  assert "a.py:1" in out
  assert "b.py" not in out


def test_blank_glob_means_all_files(tmp_path):
  _tree(tmp_path, {"a.py": "needle\n"})

  out = search_files(SearchArgs(path=str(tmp_path), regex="needle", file_pattern="  "))

  assert "FILE_PATTERN" not in out
  assert "a.py:1" in out


def test_invalid_regex_is_tool_error(tmp_path):
  out = search_files(SearchArgs(path=str(tmp_path), regex="("))

  assert out.startswith("ERROR (search_files): Invalid regex:")


def test_missing_root_is_tool_error(tmp_path):
  out = search_files(SearchArgs(path=str(tmp_path / "nope"), regex="x"))

  assert out == f"ERROR (search_files): Search path does not exist: {tmp_path / 'nope'}\n"


def test_file_root_is_tool_error(tmp_path):
  _tree(tmp_path, {"a.txt": "x\n"})

  out = search_files(SearchArgs(path=str(tmp_path / "a.txt"), regex="x"))

  assert out.startswith("ERROR (search_files): Search path is not a directory:")


def test_parse_requires_path_and_regex():
  assert parse_search_args({"path": ".", "regex": "x"}) == SearchArgs(path=".", regex="x")
  assert parse_search_args({"path": ".", "regex": "x", "file_pattern": None}).file_pattern is None
  with pytest.raises(ValueError):
    parse_search_args({"path": "."})
  with pytest.raises(ValueError):
    parse_search_args({"regex": "x"})
  with pytest.raises(ValueError):
    parse_search_args({"path": ".", "regex": 5})


def test_match_line_numbers_follow_physical_lines(tmp_path):
  (tmp_path / "feed.c").write_bytes(b"int a;\n\x0c\nint needle;\n")

  out = search_files(SearchArgs(path=str(tmp_path), regex="needle"))

  assert f"{tmp_path / 'feed.c'}:3" in out
  assert ">      3| int needle;" in out
