# src/switchbuddy/llm/client.py

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, List, Optional

import httpx
import openai
from openai import OpenAI
from pydantic import BaseModel, ValidationError

from ..core.errors import OracleError
from .flows import Flow, OutT

logger = logging.getLogger(__name__)

_BAD_MODEL_COOLDOWN_SECONDS = 3600.0


def _is_auth_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return True
    return exc.__class__.__name__ in {"UnauthorizedError"}


def _is_rate_limit_error(exc: Exception) -> bool:
    if isinstance(exc, openai.RateLimitError):
        return True
    return exc.__class__.__name__ in {"TooManyRequestsError"}


def _is_connection_error(exc: Exception) -> bool:
    if isinstance(exc, (openai.APIConnectionError, httpx.TimeoutException)):
        return True
    return exc.__class__.__name__ in {"Timeout", "ConnectTimeout", "ReadTimeout", "WriteTimeout"}


def _is_not_found_error(exc: Exception) -> bool:
    # OpenAI-compatible endpoints report an unknown model as HTTP 404
    return isinstance(exc, openai.NotFoundError)


def _extract_json_object(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("{") and raw.endswith("}"):
        return raw
    first = raw.find("{")
    last = raw.rfind("}")
    if first != -1 and last != -1 and last > first:
        return raw[first : last + 1]
    return raw


def _system_prompt(output_model: type[BaseModel]) -> str:
    schema = json.dumps(output_model.model_json_schema(), ensure_ascii=False)
    return (
        "You are the assistant inside SwitchBuddy, a career-switch planner.\n"
        "Reply with ONE JSON object and nothing else (no markdown, no comments).\n"
        "The object must validate against this JSON schema:\n"
        f"{schema}"
    )


def friendly_oracle_error_message(err: Exception) -> str:
    msg = str(err).strip() or "AI error."
    if "API key is not set" in msg:
        return "AI is not configured (missing API key). Set SB_LLM_API_KEY in .env (see config.example.py)."
    if "model list is empty" in msg:
        return "AI is not configured (no models). Set SB_LLM_MODELS in .env."
    if "authentication failed" in msg:
        return "AI authentication failed. Check SB_LLM_API_KEY."
    return msg


class OpenAICompatibleOracle:
    """
    Structured-output oracle over an OpenAI-compatible chat endpoint.

    Behavior:
    - Tries models in the order from settings (SB_LLM_MODELS).
    - 404 (model not available) -> model is skipped for an hour, try next.
    - Rate limit / network issues / unparsable or invalid JSON -> try next.
    - Auth issues -> fail fast with OracleError.
    - All models failed -> None.
    """

    def __init__(self, settings: Any, *, client: OpenAI | None = None) -> None:
        self._models: List[str] = [m.strip() for m in (getattr(settings, "llm_models", []) or []) if m.strip()]
        if not self._models:
            raise OracleError("LLM model list is empty. Set SB_LLM_MODELS in your .env.")

        if client is None:
            api_key = getattr(settings, "llm_api_key", None)
            base_url = str(getattr(settings, "llm_base_url", "") or "")
            if not api_key or not str(api_key).strip():
                raise OracleError("LLM API key is not set. Set SB_LLM_API_KEY in your .env.")

            connect_s = float(getattr(settings, "llm_connect_timeout", 5.0))
            read_s = float(getattr(settings, "llm_read_timeout", 60.0))
            # Retries are off so a failing model falls through to the next one quickly.
            client = OpenAI(
                base_url=base_url or None,
                api_key=str(api_key),
                timeout=httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s),
                max_retries=0,
            )

        self._client = client
        self._bad_models: Dict[str, float] = {}  # model -> retry_at (monotonic)

    def _complete(self, model: str, messages: list[dict[str, str]]) -> str:
        resp = self._client.chat.completions.create(
            model=model,
            messages=messages,
            response_format={"type": "json_object"},
        )
        content = resp.choices[0].message.content if resp.choices else None
        return content or ""

    def invoke(self, flow: Flow[Any, OutT], data: BaseModel) -> OutT | None:
        messages = [
            {"role": "system", "content": _system_prompt(flow.output_model)},
            {"role": "user", "content": flow.build_prompt(data)},
        ]

        last_error: Optional[Exception] = None
        now = time.monotonic()

        for model in self._models:
            retry_at = self._bad_models.get(model)
            if retry_at is not None and retry_at > now:
                continue

            logger.info("Oracle: flow=%s trying model=%s", flow.name, model)
            t0 = time.monotonic()
            try:
                raw = self._complete(model, messages)
                if not raw.strip():
                    last_error = RuntimeError(f"Model returned no content: {model}")
                    logger.info("Oracle: empty reply from model=%s, trying next", model)
                    continue

                result = flow.output_model.model_validate(json.loads(_extract_json_object(raw)))
                logger.info("Oracle: flow=%s ok model=%s (%.2fs)", flow.name, model, time.monotonic() - t0)
                return result

            except (json.JSONDecodeError, ValidationError) as e:
                last_error = e
                logger.info("Oracle: invalid output from model=%s (%s), trying next", model, e.__class__.__name__)
                continue

            except Exception as e:
                last_error = e

                if _is_auth_error(e):
                    raise OracleError("LLM authentication failed. Check your API key (SB_LLM_API_KEY).") from e

                if _is_not_found_error(e):
                    self._bad_models[model] = time.monotonic() + _BAD_MODEL_COOLDOWN_SECONDS
                    logger.info("Oracle: model not available (404): %s", model)
                    continue

                if _is_rate_limit_error(e):
                    logger.info("Oracle: rate-limited on model=%s, trying next", model)
                    continue

                if _is_connection_error(e):
                    logger.info("Oracle: network/timeout error on model=%s, trying next", model)
                    continue

                logger.info("Oracle: error on model=%s (%s), trying next", model, e.__class__.__name__)
                continue

        logger.warning(
            "Oracle: all models failed for flow=%s (last error: %s)",
            flow.name,
            last_error.__class__.__name__ if last_error else "none",
        )
        return None
