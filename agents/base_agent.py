# agents/base_agent.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import json
import logging

from google.genai.types import GenerateContentConfig, HttpOptions
from google import genai

from config import settings

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    def __init__(
        self,
        *,
        name: str,
        description: str,
        instruction: str,
        model: Optional[str] = None,
        temperature: float = 0.6,
        top_p: float = 0.95,
        max_output_tokens: int = 512,
        api_key: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> None:
        self.name = name
        self.description = description
        self.model = model or settings.GEMINI_MODEL
        self.instruction = instruction

        self.gen_cfg = GenerateContentConfig(
            temperature=temperature,
            top_p=top_p,
            max_output_tokens=max_output_tokens,
        )

        api_key = api_key or settings.GOOGLE_API_KEY
        if not api_key:
            raise RuntimeError(
                "Missing GOOGLE_API_KEY. Put it in your .env or export it in the shell."
            )

        self._client = genai.Client(
            api_key=api_key,
            http_options=HttpOptions(timeout=timeout_ms or settings.GEMINI_TIMEOUT_MS),
        )

    def _compose_prompt(
        self,
        payload: Dict[str, Any],
        instruction_override: Optional[str] = None
    ) -> str:
        instr = (instruction_override or self.instruction or "").strip()
        return (
            f"{instr}\n\nUSER INPUT (JSON):\n"
            f"{json.dumps(payload, ensure_ascii=False, indent=2)}\n\n"
            "RESPONSE REQUIREMENTS:\n"
            "- Follow the instruction precisely.\n"
            "- Output plain text only, no JSON, no markdown headings.\n"
        )

    def _generate(
        self,
        payload: Dict[str, Any],
        instruction_override: Optional[str] = None
    ) -> str:
        content = self._compose_prompt(payload, instruction_override)
        logger.debug("%s: calling %s", self.name, self.model)
        resp = self._client.models.generate_content(
            model=self.model,
            contents=content,
            config=self.gen_cfg,
        )
        return getattr(resp, "text", None) or ""

    @abstractmethod
    def process_request(self, inputs: Dict[str, Any]) -> str:
        ...
