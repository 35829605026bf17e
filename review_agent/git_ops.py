from __future__ import annotations
import subprocess
from dataclasses import dataclass
from pathlib import Path

class GitError(RuntimeError):
  pass

@dataclass(frozen=True)
class GitData:
  diff: str
  files_changed: list[str]
  head_hash: str
  merge_base_hash: str
  branch_name: str | None
  repo_name: str
  remote_url: str | None

def _run(repo: Path, args: list[str], strip: bool = True) -> str:
  try:
    p = subprocess.run(
      ["git", *args],
      cwd=str(repo),
      capture_output=True,
      text=True,
    )
  except OSError as e:
    raise GitError(f"failed to execute git {' '.join(args)}: {e}") from e
  if p.returncode != 0:
    raise GitError((p.stderr or p.stdout or "").strip() or f"git {' '.join(args)} failed")
  out = p.stdout or ""
  return out.strip() if strip else out

def head_sha(repo: Path) -> str:
  return _run(repo, ["rev-parse", "HEAD"])

def merge_base(repo: Path, branch: str) -> str:
  return _run(repo, ["merge-base", "HEAD", branch])

def current_branch(repo: Path) -> str | None:
  # empty on a detached HEAD
  name = _run(repo, ["branch", "--show-current"])
  return name or None

def diff_against(repo: Path, base: str) -> str:
  return _run(repo, ["diff", "--no-ext-diff", "--unified=5", "--no-color", base], strip=False)

def changed_files(repo: Path, base: str) -> list[str]:
  out = _run(repo, ["diff", "--no-ext-diff", "--name-only", base])
  return [line for line in out.splitlines() if line.strip()]

def toplevel(repo: Path) -> Path:
  return Path(_run(repo, ["rev-parse", "--show-toplevel"]))

def remote_url(repo: Path, branch: str | None) -> str | None:
  if not branch:
    return None
  try:
    remote = _run(repo, ["config", "--get", f"branch.{branch}.remote"])
    if not remote:
      return None
    return _run(repo, ["remote", "get-url", remote]) or None
  except GitError:
    return None

def collect_git_data(repo: Path, default_branch: str) -> GitData:
  base = merge_base(repo, default_branch)
  branch = current_branch(repo)
  return GitData(
    diff=diff_against(repo, base),
    files_changed=changed_files(repo, base),
    head_hash=head_sha(repo),
    merge_base_hash=base,
    branch_name=branch,
    repo_name=toplevel(repo).name,
    remote_url=remote_url(repo, branch),
  )
