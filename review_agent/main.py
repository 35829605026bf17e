from __future__ import annotations
import argparse
import os
import sys
from pathlib import Path

from review_agent.config import apply_overrides, load_review_config
from review_agent.errors import ReviewError
from review_agent.git_ops import GitError, collect_git_data
from review_agent.llm import ChatClient
from review_agent.run_log import make_run_log_dir
from review_agent.agents.reviewer import Reviewer
from review_agent.agents.reviewer_prompt import SYSTEM_PROMPT, create_user_prompt


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
  p = argparse.ArgumentParser(prog="review-agent", description="Review the current branch's diff with an LLM.")
  p.add_argument("--repo", default=".", help="Repository to review (default: current directory).")
  p.add_argument("--base", help="Branch to diff against (default: from config, else 'main').")
  p.add_argument("--model", help="Chat model name.")
  p.add_argument("--prompt", help="Additional instructions for the reviewer.")
  p.add_argument("--config", help="YAML review config (default: <repo>/.review.yaml if present).")
  p.add_argument("--log-dir", help="Write a run log (transcript, tool calls) under this directory.")
  return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
  args = parse_args(argv)
  repo = Path(args.repo).expanduser().resolve()

  if not repo.is_dir():
    print(f"[error] repo path does not exist: {repo}", file=sys.stderr)
    return 2

  try:
    cfg = load_review_config(repo, Path(args.config).expanduser() if args.config else None)
  except (OSError, ValueError) as e:
    print(f"[error] invalid review config: {e}", file=sys.stderr)
    return 2
  cfg = apply_overrides(cfg, model=args.model, base=args.base, prompt=args.prompt, log_dir=args.log_dir)

  try:
    git = collect_git_data(repo, cfg.default_branch)
  except GitError as e:
    print(f"[error] git: {e}", file=sys.stderr)
    return 1

  print(f"[ok] repo: {git.repo_name} ({git.branch_name or 'detached HEAD'} @ {git.head_hash[:12]})")
  if git.remote_url:
    print(f"[ok] remote: {git.remote_url}")
  print(f"[ok] base: {cfg.default_branch} ({git.merge_base_hash[:12]}), {len(git.files_changed)} file(s) changed")

  try:
    client = ChatClient(cfg.llm)
  except RuntimeError as e:
    print(f"[error] {e}", file=sys.stderr)
    return 2

  log = None
  if cfg.log_dir:
    log = make_run_log_dir(Path(cfg.log_dir).expanduser().resolve(), git.branch_name or git.head_hash[:12])
    log.write_json("run.json", {
      "repo": str(repo),
      "repo_name": git.repo_name,
      "branch": git.branch_name,
      "remote_url": git.remote_url,
      "head": git.head_hash,
      "merge_base": git.merge_base_hash,
      "default_branch": cfg.default_branch,
      "model": cfg.llm.model,
      "files_changed": git.files_changed,
    })

  # tool paths are taken relative to the working directory
  os.chdir(repo)

  user_prompt = create_user_prompt(git.diff, git.files_changed, cfg.additional_prompt)
  reviewer = Reviewer(client, log=log)
  try:
    result = reviewer.review(SYSTEM_PROMPT, user_prompt)
  except ReviewError as e:
    print(f"[error] {e}", file=sys.stderr)
    if log:
      log.write_text("error.txt", str(e))
    return 1

  if log:
    log.write_text("review.md", result.text)
    print(f"[ok] run log at: {log.root}")
  print(
    f"[ok] {result.turns} turn(s), {result.tool_calls} tool call(s), "
    f"tokens: prompt={result.usage.prompt_tokens} completion={result.usage.completion_tokens} total={result.usage.total_tokens}",
  )
  print(result.text)
  return 0

if __name__ == "__main__":
  raise SystemExit(main())
