from __future__ import annotations

import json
import threading
from typing import Any, Dict, List, Optional, Tuple

import requests

from .context import RequestContext
from .errors import ConfigurationError, DecodingError, StatusError
from .types import ChatRequest, ChatResponse, ModelResponse, parse_models

DEFAULT_BASE_URL = "https://models.github.ai"
API_VERSION = "2022-11-28"
DEFAULT_MODEL = "openai/gpt-4.1"
ACCEPT = "application/vnd.github+json"


class Client:
    """
    GitHub Models API client.

    Each call is a single blocking round trip governed by the RequestContext
    passed in. The client keeps no per-call state, so one instance can be
    shared between threads as long as the session can.
    """

    def __init__(self, token: str, model: Optional[str] = None, session: Optional[requests.Session] = None):
        if not token:
            raise ConfigurationError("missing GitHub token")
        self._token = token
        self._model = model or DEFAULT_MODEL
        self._base_url = DEFAULT_BASE_URL
        self._session = session if session is not None else requests.Session()

    def __repr__(self) -> str:
        return f"Client(model={self._model!r}, base_url={self._base_url!r})"

    @property
    def model(self) -> str:
        return self._model

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> requests.Session:
        return self._session

    def create_chat(self, ctx: RequestContext, req: ChatRequest) -> ChatResponse:
        payload = req.to_dict()
        if not payload["model"]:
            payload["model"] = self._model
        headers = {
            "Content-Type": "application/json",
            "Accept": ACCEPT,
            "Authorization": f"Bearer {self._token}",
            "X-GitHub-Api-Version": API_VERSION,
        }
        status, body = self._do(ctx, "POST", "/inference/chat/completions", headers, payload)
        if status >= 400:
            raise _status_error(status, body)
        try:
            return ChatResponse.from_dict(json.loads(body))
        except ValueError as exc:
            raise DecodingError(f"invalid chat response: {exc}") from exc

    def list_models(self, ctx: RequestContext) -> List[ModelResponse]:
        # No API-version header here, unlike create_chat.
        headers = {
            "Accept": ACCEPT,
            "Authorization": f"Bearer {self._token}",
        }
        status, body = self._do(ctx, "GET", "/catalog/models", headers)
        if status >= 400:
            raise _status_error(status, body)
        try:
            return parse_models(json.loads(body))
        except ValueError as exc:
            raise DecodingError(f"invalid model catalog: {exc}") from exc

    def _do(
        self,
        ctx: RequestContext,
        method: str,
        path: str,
        headers: Dict[str, str],
        payload: Optional[Dict[str, Any]] = None,
    ) -> Tuple[int, bytes]:
        url = f"{self._base_url}{path}"
        timeout = ctx.remaining()
        finished = threading.Event()
        outcome: Dict[str, Any] = {}

        def round_trip() -> None:
            try:
                outcome["result"] = self._round_trip(ctx, method, url, headers, payload, timeout)
            except Exception as exc:
                outcome["error"] = exc
            finally:
                finished.set()

        # requests cannot be interrupted, so the round trip runs on a worker
        # and the caller returns as soon as the context is done
        threading.Thread(target=round_trip, name="ghmodels-request", daemon=True).start()
        ctx.wait(finished)
        if ctx.cancelled:
            raise ctx.error() from outcome.get("error")
        if "error" in outcome:
            raise outcome["error"]
        return outcome["result"]

    def _round_trip(
        self,
        ctx: RequestContext,
        method: str,
        url: str,
        headers: Dict[str, str],
        payload: Optional[Dict[str, Any]],
        timeout: Optional[float],
    ) -> Tuple[int, bytes]:
        resp = self._session.request(method, url, headers=headers, json=payload, timeout=timeout, stream=True)
        with ctx.track(resp):
            try:
                body = resp.content
            finally:
                resp.close()
        return resp.status_code, body or b""


def _status_error(status: int, body: bytes) -> StatusError:
    try:
        data = json.loads(body)
    except ValueError:
        data = None
    if isinstance(data, dict) and isinstance(data.get("error"), str):
        return StatusError(status, data["error"])
    return StatusError(status, body.decode("utf-8", errors="replace"))
