from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Any

import openai
from openai import OpenAI
from dotenv import load_dotenv

from review_agent.errors import ChatAPIError
from review_agent.messages import NO_CONTENT, ChatTurn, Message, ToolCall, ToolDeclaration, Usage

load_dotenv()

FAILED_FINISH_REASONS = ("error", "content_filter")


@dataclass(frozen=True)
class LLMConfig:
  model: str = "gpt-5-mini"
  temperature: float | None = None
  max_tokens: int | None = None
  reasoning_effort: str | None = None


class ChatClient:
  def __init__(self, cfg: LLMConfig, api_key: str | None = None, base_url: str | None = None, client: Any = None):
    if client is None:
      api_key = api_key or os.environ.get("OPENAI_API_KEY")
      if not api_key:
        raise RuntimeError("OPENAI_API_KEY is not set")
      base_url = base_url or os.environ.get("OPENAI_BASE_URL") or None
      # failures are fatal for the run, no retries
      client = OpenAI(api_key=api_key, base_url=base_url, max_retries=0)
    self.client = client
    self.cfg = cfg

  def build_request(self, messages: list[Message], tools: list[ToolDeclaration]) -> dict[str, Any]:
    request: dict[str, Any] = {
      "model": self.cfg.model,
      "messages": [m.to_dict() for m in messages],
    }
    if tools:
      request["tools"] = [t.to_dict() for t in tools]
      request["tool_choice"] = "auto"
    if self.cfg.temperature is not None:
      request["temperature"] = self.cfg.temperature
    if self.cfg.max_tokens is not None:
      request["max_tokens"] = self.cfg.max_tokens
    if self.cfg.reasoning_effort is not None:
      request["reasoning_effort"] = self.cfg.reasoning_effort
    return request

  def chat(self, messages: list[Message], tools: list[ToolDeclaration]) -> ChatTurn:
    request = self.build_request(messages, tools)
    try:
      resp = self.client.chat.completions.create(**request)
    except openai.OpenAIError as e:
      raise ChatAPIError(f"Chat API request failed: {e}") from e
    return parse_chat_response(resp)


def _parse_usage(usage: Any) -> Usage:
  if usage is None:
    return Usage()
  return Usage(
    prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
    completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
    total_tokens=getattr(usage, "total_tokens", 0) or 0,
  )


def parse_chat_response(resp: Any) -> ChatTurn:
  """Normalize an SDK response into the first choice, raising ChatAPIError on irregular payloads."""
  # some gateways answer 200 with an error object in the body
  error = getattr(resp, "error", None)
  if error:
    raise ChatAPIError(f"Chat API returned an error: {error}")

  choices = getattr(resp, "choices", None) or []
  if not choices:
    raise ChatAPIError("Chat API returned no choices")

  choice = choices[0]
  finish_reason = getattr(choice, "finish_reason", None) or ""
  if finish_reason in FAILED_FINISH_REASONS:
    raise ChatAPIError(f"Chat API response finished with reason: {finish_reason}")

  msg = getattr(choice, "message", None)
  if msg is None:
    raise ChatAPIError("Chat API choice carries no message")

  tool_calls: list[ToolCall] = []
  for tc in getattr(msg, "tool_calls", None) or []:
    fn = getattr(tc, "function", None)
    if fn is None:
      raise ChatAPIError(f"Unsupported tool call type: {getattr(tc, 'type', None)}")
    tool_calls.append(ToolCall(id=tc.id, name=fn.name, arguments=fn.arguments or ""))

  content = getattr(msg, "content", None)
  if content is None and not tool_calls:
    content = NO_CONTENT

  return ChatTurn(
    message=Message.assistant(content, tuple(tool_calls)),
    finish_reason=finish_reason,
    usage=_parse_usage(getattr(resp, "usage", None)),
  )
