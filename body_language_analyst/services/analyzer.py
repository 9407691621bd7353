"""AnalyzerService: guards, calls the ModelProvider and normalizes the outcome."""
from typing import Any, Optional, Sequence
import sys

from ..models import AnalysisFailure, AnalysisResult, AnalysisSuccess, PromptRequest, TaggedImage
from ..prompts import build_prompt, load_system_instruction
from ..providers.base import ModelProvider

NO_IMAGES_MESSAGE = "Please upload at least one image to analyze."
MISSING_KEY_MESSAGE = "OPENAI_API_KEY is not set"


class AnalyzerService:
    def __init__(self, provider: ModelProvider):
        self.provider = provider

    def analyze(self, cfg: Any, request: PromptRequest, system_prompt: Optional[str] = None) -> AnalysisResult:
        """Never raises: every failure comes back as :class:`AnalysisFailure`."""
        if not request.parts:
            return AnalysisFailure(NO_IMAGES_MESSAGE, kind="validation")
        if not getattr(cfg, "api_key", None):
            return AnalysisFailure(MISSING_KEY_MESSAGE, kind="config")
        try:
            text, usage = self.provider.call_analysis(cfg, request.text, request.parts, system_prompt=system_prompt)
        except Exception as e:
            print(f"ERROR: analysis request failed: {e}", file=sys.stderr)
            return AnalysisFailure(f"An error occurred while analyzing the images: {e}", kind="service")
        if not (text or "").strip():
            return AnalysisFailure("The model returned an empty response.", kind="service")
        if getattr(cfg, "debug", False) and usage:
            print(f"[ANALYZE_DEBUG] usage: {usage}", file=sys.stderr)
        return AnalysisSuccess(text=text, usage=usage)

    def analyze_images(self, cfg: Any, context: str, images: Sequence[TaggedImage]) -> AnalysisResult:
        try:
            request = build_prompt(context, images)
            system_prompt = load_system_instruction(cfg)
        except Exception as e:
            print(f"ERROR: failed to prepare analysis request: {e}", file=sys.stderr)
            return AnalysisFailure(f"An error occurred while analyzing the images: {e}", kind="service")
        return self.analyze(cfg, request, system_prompt=system_prompt)
