from __future__ import annotations
from dataclasses import dataclass, field
from typing import Protocol

from review_agent.errors import EmptyResponseError, ToolBudgetExceeded
from review_agent.messages import NO_CONTENT, ChatTurn, Message, ToolDeclaration, Usage
from review_agent.run_log import RunLog
from review_agent.tools.dispatch import dispatch, summarize_tool_call, tool_declarations

MAX_TOOL_CALLS = 8


class ChatBackend(Protocol):
  def chat(self, messages: list[Message], tools: list[ToolDeclaration]) -> ChatTurn: ...


@dataclass
class ReviewResult:
  text: str
  tool_calls: int
  turns: int
  usage: Usage
  transcript: list[Message] = field(default_factory=list)


class Reviewer:
  def __init__(self, client: ChatBackend, max_tool_calls: int = MAX_TOOL_CALLS, log: RunLog | None = None):
    self.client = client
    self.max_tool_calls = max_tool_calls
    self.log = log

  def review(self, system_prompt: str, user_prompt: str) -> ReviewResult:
    transcript = [Message.system(system_prompt), Message.user(user_prompt)]
    tools = tool_declarations()
    executed = 0
    turns = 0
    usage = Usage()

    while True:
      # the API is stateless: every turn carries the whole transcript
      turn = self.client.chat(transcript, tools)
      turns += 1
      usage = usage + turn.usage
      message = turn.message
      self._log_turn(turns, transcript, turn)

      if not message.tool_calls:
        text = (message.content or "").strip()
        if not text or text == NO_CONTENT:
          raise EmptyResponseError(f"Model returned an empty response (finish reason: {turn.finish_reason or 'unknown'})")
        transcript.append(message)
        return ReviewResult(text=text, tool_calls=executed, turns=turns, usage=usage, transcript=transcript)

      transcript.append(message)
      for call in message.tool_calls:
        if executed >= self.max_tool_calls:
          raise ToolBudgetExceeded(self.max_tool_calls)
        executed += 1
        print(f"[tool] {summarize_tool_call(call.name, call.arguments)}")
        output = dispatch(call.name, call.arguments)
        if self.log:
          self.log.write_text(f"tool_{executed}_{call.name}.txt", f"{call.arguments}\n\n{output}")
        transcript.append(Message.tool(call.id, output))

  def _log_turn(self, turn_no: int, transcript: list[Message], turn: ChatTurn) -> None:
    if not self.log:
      return
    self.log.write_json(f"turn_{turn_no}_request.json", [m.to_dict() for m in transcript])
    self.log.write_json(f"turn_{turn_no}_response.json", {
      "message": turn.message.to_dict(),
      "finish_reason": turn.finish_reason,
      "usage": vars(turn.usage),
    })
