from __future__ import annotations
from dataclasses import dataclass
from typing import Any

# stands in for a null assistant content
NO_CONTENT = "(no content)"


@dataclass(frozen=True)
class ToolCall:
  id: str
  name: str
  arguments: str  # JSON text, decoded by the dispatcher

  def to_dict(self) -> dict[str, Any]:
    return {
      "id": self.id,
      "type": "function",
      "function": {"name": self.name, "arguments": self.arguments},
    }


@dataclass(frozen=True)
class Message:
  role: str  # system | user | assistant | tool
  content: str | None = None
  tool_calls: tuple[ToolCall, ...] = ()
  tool_call_id: str | None = None

  @classmethod
  def system(cls, content: str) -> Message:
    return cls(role="system", content=content)

  @classmethod
  def user(cls, content: str) -> Message:
    return cls(role="user", content=content)

  @classmethod
  def assistant(cls, content: str | None, tool_calls: tuple[ToolCall, ...] = ()) -> Message:
    return cls(role="assistant", content=content, tool_calls=tuple(tool_calls))

  @classmethod
  def tool(cls, tool_call_id: str, content: str) -> Message:
    return cls(role="tool", content=content, tool_call_id=tool_call_id)

  def to_dict(self) -> dict[str, Any]:
    d: dict[str, Any] = {"role": self.role, "content": self.content}
    if self.tool_calls:
      d["tool_calls"] = [tc.to_dict() for tc in self.tool_calls]
    if self.tool_call_id is not None:
      d["tool_call_id"] = self.tool_call_id
    return d


@dataclass(frozen=True)
class ToolDeclaration:
  name: str
  description: str
  parameters: dict[str, Any]  # JSON schema of the arguments

  def to_dict(self) -> dict[str, Any]:
    return {
      "type": "function",
      "function": {
        "name": self.name,
        "description": self.description,
        "parameters": self.parameters,
      },
    }


@dataclass(frozen=True)
class Usage:
  prompt_tokens: int = 0
  completion_tokens: int = 0
  total_tokens: int = 0

  def __add__(self, other: Usage) -> Usage:
    return Usage(
      prompt_tokens=self.prompt_tokens + other.prompt_tokens,
      completion_tokens=self.completion_tokens + other.completion_tokens,
      total_tokens=self.total_tokens + other.total_tokens,
    )


@dataclass(frozen=True)
class ChatTurn:
  """First choice of a chat-completions response."""
  message: Message
  finish_reason: str
  usage: Usage
