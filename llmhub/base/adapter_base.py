"""Shared implementation of a single-call HTTP provider adapter.

Purpose:
    Hold the parts every provider adapter has in common so each concrete
    adapter only declares its endpoint, auth and wire models:

    1. build a typed request record from the normalized chat;
    2. POST it once through the pooled ``httpx`` client;
    3. turn a non-success status into :class:`ProviderError` carrying the
       response body verbatim;
    4. validate the success payload against a typed response record and pull
       out the reply text.

Failure semantics:
    - Non-2xx status: ``ProviderError`` with ``message`` equal to
      ``"<Display> API error: <raw body>"`` and the code from
      :func:`classify_status`.
    - Transport failure: ``ProviderError`` classified by
      :func:`classify_exception`; no body.
    - Success without a usable text field, a non-JSON body, or a payload that
      fails validation: the placeholder reply is returned. This is logged as
      ``malformed=True`` and is not an error.

Timeouts and retries:
    None here. The pooled client's timeout comes from ``get_timeout_config``
    and no call is ever repeated.
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional, Type

import httpx
from pydantic import BaseModel, ValidationError

from ..config import get_provider_config
from ..config.defaults import NO_RESPONSE_PLACEHOLDER
from .errors import ProviderError, classify_exception, classify_status
from .http import get_httpx_client
from .logging import LogContext, get_logger, normalized_log_event
from .models import GenerationParams, NormalizedChat
from .normalize import MessageShape


class BaseHTTPAdapter:
    """Template for adapters that make one JSON POST per reply.

    Subclasses set ``provider_name``, ``shape`` and ``response_model`` and
    implement :meth:`build_request`, :meth:`endpoint` and
    :meth:`extract_text`. :meth:`headers` and :meth:`query_params` default to
    bearer auth and no query string.
    """

    provider_name: str = ""
    shape: MessageShape = MessageShape.NATIVE_SYSTEM
    response_model: Type[BaseModel]

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.Client] = None) -> None:
        """Resolve endpoint configuration for the adapter.

        Parameters
        ----------
        base_url:
            Explicit API base URL. When omitted, the layered configuration
            (defaults, config file, ``<PROVIDER>_BASE_URL``) decides.
        client:
            Explicit ``httpx.Client``. When omitted, a pooled client is used.
        """
        cfg = get_provider_config(self.provider_name, overrides={"base_url": base_url})
        self._config: Dict[str, Any] = cfg
        self._base_url: str = str(cfg.get("base_url") or "").rstrip("/")
        self._display_name: str = cfg.get("display_name") or self.provider_name
        self._client = client
        self._logger = get_logger(f"llmhub.{self.provider_name}")

    @property
    def display_name(self) -> str:
        return self._display_name

    # ------------------------------------------------------------------ hooks

    def build_request(self, chat: NormalizedChat, model: str, params: GenerationParams) -> BaseModel:
        raise NotImplementedError

    def endpoint(self, model: str) -> str:
        raise NotImplementedError

    def extract_text(self, response: Any) -> Optional[str]:
        raise NotImplementedError

    def headers(self, api_key: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"}

    def query_params(self, api_key: str) -> Dict[str, str]:
        return {}

    # --------------------------------------------------------------- template

    def _http(self) -> httpx.Client:
        if self._client is not None:
            return self._client
        return get_httpx_client(self._base_url, purpose=f"{self.provider_name}.chat")

    def generate(
        self,
        chat: NormalizedChat,
        model: str,
        api_key: str,
        params: GenerationParams,
    ) -> str:
        """Perform one provider call and return the reply text."""
        ctx = LogContext(provider=self.provider_name, model=model)
        body = self.build_request(chat, model, params).model_dump(by_alias=True, exclude_none=True)
        normalized_log_event(
            self._logger,
            "chat.start",
            ctx,
            phase="start",
            messages=len(chat.messages),
            max_tokens=params.max_tokens,
            temperature=params.temperature,
        )

        t0 = time.perf_counter()
        try:
            resp = self._http().post(
                self.endpoint(model),
                json=body,
                headers=self.headers(api_key),
                params=self.query_params(api_key),
            )
        except httpx.HTTPError as e:
            err = ProviderError(
                code=classify_exception(e),
                message=f"{self._display_name} API request failed: {e}",
                provider=self.provider_name,
                model=model,
                raw=e,
            )
            self._log_error(ctx, err)
            raise err from e
        latency_ms = (time.perf_counter() - t0) * 1000.0

        if not resp.is_success:
            raw_body = resp.text
            err = ProviderError(
                code=classify_status(resp.status_code),
                message=f"{self._display_name} API error: {raw_body}",
                provider=self.provider_name,
                model=model,
                status_code=resp.status_code,
                raw_body=raw_body,
            )
            self._log_error(ctx, err, latency_ms=latency_ms)
            raise err

        text = self._parse_text(resp)
        normalized_log_event(
            self._logger,
            "chat.end",
            ctx,
            phase="finalize",
            emitted=True,
            latency_ms=latency_ms,
            malformed=text is None,
        )
        return text if text is not None else NO_RESPONSE_PLACEHOLDER

    def _parse_text(self, resp: httpx.Response) -> Optional[str]:
        """Return reply text, or ``None`` when the payload has none."""
        try:
            payload = resp.json()
        except ValueError:
            return None
        try:
            parsed = self.response_model.model_validate(payload)
        except ValidationError:
            return None
        text = self.extract_text(parsed)
        return text or None

    def _log_error(self, ctx: LogContext, err: ProviderError, **extra: Any) -> None:
        normalized_log_event(
            self._logger,
            "chat.error",
            ctx,
            phase="finalize",
            emitted=False,
            error_code=err.code.value,
            status_code=err.status_code,
            **extra,
        )


__all__ = ["BaseHTTPAdapter"]
