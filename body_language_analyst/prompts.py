from typing import Any, Sequence

from .config import read_prompt_file
from .models import ImagePart, PromptRequest, TaggedImage

SYSTEM_INSTRUCTION = """You are an expert in non-verbal communication, psychology, and body language. Your task is to provide an expert-level analysis of the body language displayed in the provided image(s).
- Analyze posture, gestures, facial expressions, eye contact, and proxemics (use of space).
- If people are tagged with names, refer to them by name in your analysis.
- If context is provided, incorporate it into your analysis to understand the relationships and situation.
- Structure your analysis clearly. Start with an overall summary, then provide detailed observations for each person or interaction.
- Conclude with your interpretation of the overall emotional tone and dynamics of the scene.
- Your response must be in Markdown format."""

PROMPT_HEADER = "Please analyze the following image(s).\n\n"


def build_prompt(context: str, images: Sequence[TaggedImage]) -> PromptRequest:
    """Serialize the user context and per-image tags into one prompt.

    Image sections are numbered from 1 in the same order as ``parts`` so the
    model can match text sections to payloads by position.
    """
    lines = [PROMPT_HEADER]
    if context:
        lines.append(f'Context from the user: "{context}"\n\n')
    for index, image in enumerate(images, start=1):
        lines.append(f"--- Image {index} ---\n")
        if image.tags:
            lines.append("The following people are tagged in this image:\n")
            for tag in image.tags:
                lines.append(f"- '{tag.name}' is located at approximate coordinates (x: {tag.x}, y: {tag.y}).\n")
        else:
            lines.append("No people were tagged in this image.\n")
        lines.append("\n")
    parts = tuple(ImagePart(mime_type=image.mime_type, data=image.encoded) for image in images)
    return PromptRequest(text="".join(lines), parts=parts)


def load_system_instruction(cfg: Any = None) -> str:
    custom = read_prompt_file(getattr(cfg, "prompt_file", None))
    return custom.strip() or SYSTEM_INSTRUCTION
