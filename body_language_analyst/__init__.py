"""Public API for body_language_analyst.

Expose a small, explicit set of helpers used by the web UI, the CLI and tests.
"""
from importlib.metadata import PackageNotFoundError, version

try:
	__version__ = version("body-language-analyst")
except PackageNotFoundError:
	__version__ = "0.0.0"

from .config import Settings, ConfigError, load_config, read_prompt_file
from .models import Tag, TaggedImage, ImagePart, PromptRequest, AnalysisSuccess, AnalysisFailure
from .image_io import ImageReadError, IngestResult, encode_image_bytes, ingest_uploads, load_image_file
from .tags import add_tag, remove_image, find_image
from .tagging import TaggingSession, TaggingState, to_image_coordinates
from .prompts import SYSTEM_INSTRUCTION, build_prompt, load_system_instruction
from .services.analyzer import AnalyzerService
from .state import AppState, run_analysis

__all__ = [
	"Settings",
	"ConfigError",
	"load_config",
	"read_prompt_file",
	"Tag",
	"TaggedImage",
	"ImagePart",
	"PromptRequest",
	"AnalysisSuccess",
	"AnalysisFailure",
	"ImageReadError",
	"IngestResult",
	"encode_image_bytes",
	"ingest_uploads",
	"load_image_file",
	"add_tag",
	"remove_image",
	"find_image",
	"TaggingSession",
	"TaggingState",
	"to_image_coordinates",
	"SYSTEM_INSTRUCTION",
	"build_prompt",
	"load_system_instruction",
	"AnalyzerService",
	"AppState",
	"run_analysis",
	"__version__",
]
