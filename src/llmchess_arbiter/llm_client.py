from __future__ import annotations
"""
LLM client facade over an OpenAI-compatible chat-completions endpoint (base URL configurable).

The rest of the code should not care which SDK is in use. fetch_move() sends
`model` + `temperature` + `max_tokens` + `messages` and returns one UCI token
pulled out of the first choice, or raises a MoveProviderError subclass.

- One attempt per call: SDK retries are disabled and the whole call is bounded by timeout_s.
- No credential means no client and no network access; fetch_move raises ConfigurationAbsent.
- asyncio.CancelledError is not caught, so cancelling the caller aborts the request.
"""
import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol

import openai
from openai import AsyncOpenAI

from .config import DEFAULT_API_BASE, DEFAULT_MODEL, Settings
from .errors import ConfigurationAbsent, MalformedResponse, TransportFailure
from .move_validator import extract_uci

log = logging.getLogger("llm_client")


class MoveProvider(Protocol):
    @property
    def configured(self) -> bool: ...

    async def fetch_move(self, system_prompt: str, user_prompt: str, temperature: float) -> str: ...


class OpenAIMoveProvider:
    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str | None = DEFAULT_API_BASE,
        timeout_s: float = 20.0,
        max_output_tokens: int = 10,
        client: Any = None,
    ):
        self.api_key = (api_key or "").strip()
        self.model = model
        self.base_url = base_url
        self.timeout_s = timeout_s
        self.max_output_tokens = max_output_tokens
        if client is None and self.api_key:
            client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=base_url or None,
                timeout=timeout_s,
                max_retries=0,
            )
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings, client: Any = None) -> "OpenAIMoveProvider":
        return cls(
            api_key=settings.llm_api_key,
            model=settings.model,
            base_url=settings.api_base,
            timeout_s=settings.request_timeout_s,
            max_output_tokens=settings.max_output_tokens,
            client=client,
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key) and self._client is not None

    async def fetch_move(self, system_prompt: str, user_prompt: str, temperature: float) -> str:
        if not self.configured:
            raise ConfigurationAbsent("no LLM API key configured")
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            rsp = await asyncio.wait_for(
                self._client.chat.completions.create(
                    model=self.model,
                    temperature=temperature,
                    max_tokens=self.max_output_tokens,
                    messages=messages,
                    timeout=self.timeout_s,
                ),
                timeout=self.timeout_s,
            )
        except asyncio.TimeoutError as exc:
            raise TransportFailure(f"no response within {self.timeout_s:.1f}s") from exc
        except openai.APIResponseValidationError as exc:
            raise MalformedResponse(f"unexpected response body: {exc}") from exc
        except openai.APIStatusError as exc:
            raise TransportFailure(f"status {exc.status_code}") from exc
        except openai.APIConnectionError as exc:
            raise TransportFailure(f"connection error: {exc}") from exc
        except openai.OpenAIError as exc:
            raise TransportFailure(str(exc)) from exc
        except ValueError as exc:
            # JSON decoding of a garbled body
            raise MalformedResponse(str(exc)) from exc
        except Exception as exc:
            # anything else raised below the SDK (httpx/anyio) is still a transport fault
            log.exception("Unexpected error from chat completions call")
            raise TransportFailure(f"{type(exc).__name__}: {exc}") from exc

        text = _extract_text(rsp)
        if text is None:
            raise MalformedResponse("response has no choices[0].message.content")
        log.debug("LLM raw reply: %r", text)
        uci = extract_uci(text)
        if not uci:
            raise MalformedResponse("no UCI move in reply", raw=text)
        return uci

    async def aclose(self) -> None:
        client, self._client = self._client, None
        if client is not None and hasattr(client, "close"):
            await client.close()


def _extract_text(rsp: Any) -> Optional[str]:
    """Return choices[0].message.content as text, or None if the shape is wrong.

    Accepts SDK objects and plain dicts; list-of-parts content is joined.
    """
    choices = rsp.get("choices") if isinstance(rsp, dict) else getattr(rsp, "choices", None)
    if not choices:
        return None
    first = choices[0]
    msg = first.get("message") if isinstance(first, dict) else getattr(first, "message", None)
    if msg is None:
        return None
    content = msg.get("content") if isinstance(msg, dict) else getattr(msg, "content", None)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for c in content:
            t = c.get("text") if isinstance(c, dict) else getattr(c, "text", None)
            if isinstance(t, str):
                parts.append(t)
        if parts:
            return "\n".join(parts)
    return None
