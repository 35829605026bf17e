from __future__ import annotations


class ReviewError(RuntimeError):
  """Fatal failure of a review run."""


class ChatAPIError(ReviewError):
  pass


class ToolBudgetExceeded(ReviewError):
  def __init__(self, limit: int):
    super().__init__(f"Tool call budget exceeded: more than {limit} tool calls requested")
    self.limit = limit


class EmptyResponseError(ReviewError):
  pass
