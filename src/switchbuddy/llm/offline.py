# src/switchbuddy/llm/offline.py

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from .flows import Flow, OutT

logger = logging.getLogger(__name__)


class OfflineOracle:
    """
    Oracle used when no LLM endpoint is configured.

    Never invents output: every flow returns None, so callers report the AI as unavailable.
    """

    def invoke(self, flow: Flow[Any, OutT], data: BaseModel) -> OutT | None:
        logger.info("Offline mode: flow=%s skipped (set SB_LLM_API_KEY to enable AI)", flow.name)
        return None
