"""Application state and its transitions.

Every transition takes an :class:`AppState` and returns a new one; nothing is
mutated in place. The analysis request carries a token so a response that
arrives after a newer request has started is dropped.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from .image_io import IngestResult
from .models import AnalysisFailure, AnalysisResult, Tag, TaggedImage
from .services.analyzer import NO_IMAGES_MESSAGE, AnalyzerService
from .tags import add_tag, remove_image


@dataclass(frozen=True)
class AppState:
    images: Tuple[TaggedImage, ...] = ()
    context: str = ""
    analysis: str = ""
    loading: bool = False
    error: Optional[str] = None
    request_token: int = 0


def images_uploaded(state: AppState, result: IngestResult) -> AppState:
    # result.images already holds the previous images followed by the new ones;
    # a clean batch clears any earlier banner
    return replace(state, images=result.images, error=result.error_message)


def image_removed(state: AppState, image_id: str) -> AppState:
    return replace(state, images=remove_image(state.images, image_id))


def tag_added(state: AppState, image_id: str, tag: Tag) -> AppState:
    return replace(state, images=add_tag(state.images, image_id, tag))


def context_changed(state: AppState, text: str) -> AppState:
    return replace(state, context=text or "")


def analysis_started(state: AppState) -> Tuple[AppState, Optional[int]]:
    if state.loading:
        return state, None
    if not state.images:
        return replace(state, error=NO_IMAGES_MESSAGE), None
    token = state.request_token + 1
    return replace(state, loading=True, error=None, analysis="", request_token=token), token


def analysis_succeeded(state: AppState, token: int, text: str) -> AppState:
    if token != state.request_token:
        return state
    return replace(state, loading=False, analysis=text, error=None)


def analysis_failed(state: AppState, token: int, reason: str) -> AppState:
    if token != state.request_token:
        return state
    return replace(state, loading=False, error=reason)


def analysis_finished(state: AppState, token: int, result: AnalysisResult) -> AppState:
    if isinstance(result, AnalysisFailure):
        return analysis_failed(state, token, result.reason)
    return analysis_succeeded(state, token, result.text)


def run_analysis(state: AppState, cfg: Any, service: AnalyzerService) -> AppState:
    """Start, call and finish one analysis synchronously."""
    state, token = analysis_started(state)
    if token is None:
        return state
    # the request works on the images as they were when it started
    result = service.analyze_images(cfg, state.context, state.images)
    return analysis_finished(state, token, result)
