from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_FUNCTION = "function"
ROLE_TOOL = "tool"


def _str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string")
    return value


def _str_list(value: Any, name: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{name} must be an array")
    return [_str(v, name) for v in value]


def _object(value: Any, name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object")
    return value


@dataclass(frozen=True)
class Message:
    role: str  # "system" | "user" | "assistant" | "function" | "tool"
    content: str

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Any) -> "Message":
        data = _object(data, "message")
        return cls(role=_str(data.get("role"), "role"), content=_str(data.get("content"), "content"))


@dataclass
class ChatRequest:
    messages: List[Message]
    model: str = ""
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    top_p: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [msg.to_dict() for msg in self.messages],
        }
        if self.temperature is not None:
            payload["temperature"] = self.temperature
        if self.max_tokens is not None:
            payload["max_tokens"] = self.max_tokens
        if self.top_p is not None:
            payload["top_p"] = self.top_p
        return payload


@dataclass(frozen=True)
class Choice:
    message: Message
    finish_reason: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Choice":
        data = _object(data, "choice")
        return cls(
            message=Message.from_dict(data.get("message")),
            finish_reason=_str(data.get("finish_reason"), "finish_reason"),
        )


@dataclass
class ChatResponse:
    choices: List[Choice] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ChatResponse":
        data = _object(data, "chat response")
        raw = data.get("choices")
        if raw is None:
            raw = []
        if not isinstance(raw, list):
            raise ValueError("choices must be an array")
        return cls(choices=[Choice.from_dict(c) for c in raw])


@dataclass
class ModelResponse:
    id: str
    name: str = ""
    publisher: str = ""
    summary: str = ""
    rate_limit_tier: str = ""
    supported_input_modalities: List[str] = field(default_factory=list)
    supported_output_modalities: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> "ModelResponse":
        data = _object(data, "model entry")
        return cls(
            id=_str(data.get("id"), "id"),
            name=_str(data.get("name"), "name"),
            publisher=_str(data.get("publisher"), "publisher"),
            summary=_str(data.get("summary"), "summary"),
            rate_limit_tier=_str(data.get("rate_limit_tier"), "rate_limit_tier"),
            supported_input_modalities=_str_list(data.get("supported_input_modalities"), "supported_input_modalities"),
            supported_output_modalities=_str_list(data.get("supported_output_modalities"), "supported_output_modalities"),
            tags=_str_list(data.get("tags"), "tags"),
        )


def parse_models(data: Any) -> List[ModelResponse]:
    """
    Build the catalog from the decoded `/catalog/models` body.
    Raises ValueError when the payload is not an array of objects.
    """
    if not isinstance(data, list):
        raise ValueError("model catalog must be an array")
    return [ModelResponse.from_dict(m) for m in data]
