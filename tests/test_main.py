import os

import pytest

from review_agent import main as cli
from review_agent.errors import ToolBudgetExceeded
from review_agent.git_ops import GitData, GitError
from review_agent.messages import ChatTurn, Message, Usage

GIT = GitData(
  diff="diff --git a/app.py b/app.py\n+x = 1\n",
  files_changed=["app.py"],
  head_hash="a" * 40,
  merge_base_hash="b" * 40,
  branch_name="feature",
  repo_name="project",
  remote_url=None,
)


class FakeChatClient:
  instances = []

  def __init__(self, cfg):
    self.cfg = cfg
    self.requests = []
    FakeChatClient.instances.append(self)

  def chat(self, messages, tools):
    self.requests.append(list(messages))
    return ChatTurn(message=Message.assistant("No issues found."), finish_reason="stop", usage=Usage(7, 3, 10))


@pytest.fixture
def fake_env(tmp_path, monkeypatch):
  FakeChatClient.instances = []
  monkeypatch.chdir(tmp_path)
  monkeypatch.setattr(cli, "collect_git_data", lambda repo, base: GIT)
  monkeypatch.setattr(cli, "ChatClient", FakeChatClient)
  return tmp_path


def test_successful_review(fake_env, capsys):
  code = cli.main(["--repo", str(fake_env), "--model", "m1", "--prompt", "Be strict."])

  out = capsys.readouterr().out
  assert code == 0
  assert "[ok] repo: project (feature @ aaaaaaaaaaaa)" in out
  assert "1 file(s) changed" in out
  assert "tokens: prompt=7 completion=3 total=10" in out
  assert out.rstrip().endswith("No issues found.")

  client = FakeChatClient.instances[0]
  assert client.cfg.model == "m1"
  user_prompt = client.requests[0][1].content
  assert "Be strict." in user_prompt
  assert GIT.diff in user_prompt
  assert os.getcwd() == str(fake_env.resolve())


def test_base_branch_comes_from_flag(fake_env, monkeypatch):
  seen = []
  monkeypatch.setattr(cli, "collect_git_data", lambda repo, base: seen.append(base) or GIT)

  cli.main(["--repo", str(fake_env), "--base", "develop"])

  assert seen == ["develop"]


def test_writes_run_log(fake_env):
  code = cli.main(["--repo", str(fake_env), "--log-dir", str(fake_env / "logs")])

  assert code == 0
  run_dirs = list((fake_env / "logs" / "review_feature").iterdir())
  assert len(run_dirs) == 1
  names = sorted(p.name for p in run_dirs[0].iterdir())
  assert names[0] == "00_run.json"
  assert names[-1].endswith("_review.md")


def test_missing_repo_exits_2(tmp_path, capsys):
  assert cli.main(["--repo", str(tmp_path / "nope")]) == 2
  assert "[error]" in capsys.readouterr().err


def test_invalid_config_exits_2(fake_env, capsys):
  (fake_env / ".review.yaml").write_text("max_tokens: lots\n", encoding="utf-8")

  assert cli.main(["--repo", str(fake_env)]) == 2
  assert "invalid review config" in capsys.readouterr().err


def test_git_failure_exits_1(fake_env, monkeypatch, capsys):
  def fail(repo, base):
    raise GitError("fatal: not a git repository")
  monkeypatch.setattr(cli, "collect_git_data", fail)

  assert cli.main(["--repo", str(fake_env)]) == 1
  assert "[error] git: fatal: not a git repository" in capsys.readouterr().err


def test_missing_api_key_exits_2(fake_env, monkeypatch, capsys):
  def no_key(cfg):
    raise RuntimeError("OPENAI_API_KEY is not set")
  monkeypatch.setattr(cli, "ChatClient", no_key)

  assert cli.main(["--repo", str(fake_env)]) == 2
  assert "OPENAI_API_KEY" in capsys.readouterr().err


def test_review_failure_exits_1(fake_env, monkeypatch, capsys):
  def over_budget(self, system_prompt, user_prompt):
    raise ToolBudgetExceeded(8)
  monkeypatch.setattr(cli.Reviewer, "review", over_budget)

  assert cli.main(["--repo", str(fake_env)]) == 1
  assert "[error] Tool call budget exceeded" in capsys.readouterr().err
