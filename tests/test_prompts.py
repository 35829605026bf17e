from review_agent.agents.reviewer_prompt import SYSTEM_PROMPT, create_user_prompt


def test_system_prompt_mentions_tools_and_budget():
  assert "search_files" in SYSTEM_PROMPT
  assert "read_file" in SYSTEM_PROMPT
  assert "8 tool calls" in SYSTEM_PROMPT


def test_user_prompt_embeds_diff_and_files():
  diff = "diff --git a/x.py b/x.py\n+print(1)\n"

  prompt = create_user_prompt(diff, ["x.py", "y.py"])

  assert diff in prompt
  assert prompt.index("DIFF BEGINS:") < prompt.index(diff) < prompt.index("DIFF ENDS")
  assert prompt.endswith("TOUCHED FILES:\nx.py\ny.py\n")


def test_user_prompt_without_files():
  assert create_user_prompt("", []).endswith("TOUCHED FILES:\n(none)\n")


def test_additional_prompt_precedes_diff():
  prompt = create_user_prompt("+a\n", ["a"], "Check error paths.")

  assert prompt.index("Check error paths.") < prompt.index("DIFF BEGINS:")
  assert "Check error paths." not in create_user_prompt("+a\n", ["a"], "   ")
