#!/usr/bin/env python3
"""
body-language-analyst

Command-line front end: analyze one or more photos with an OpenAI-compatible
vision model, optionally naming people at pixel coordinates.

Example:
    body-language-analyst team.jpg lunch.png -c "quarterly review" \\
        --tag 1:Alice@120,80 --tag 1:Bob@340,95 -o analysis.md
"""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple
import argparse
import glob
import re
import sys

from .config import ConfigError, load_config
from .image_io import ImageReadError, load_image_file
from .models import AnalysisFailure, Tag, TaggedImage
from .prompts import build_prompt
from .providers import get_provider
from .services.analyzer import AnalyzerService
from .tags import add_tag

TAG_RE = re.compile(r"^\s*(\d+)\s*:\s*(.+?)\s*@\s*(-?\d+)\s*,\s*(-?\d+)\s*$")


def log(msg: str, quiet: bool) -> None:
    if not quiet:
        print(f"[body_language_analyst] {msg}", file=sys.stderr)


def expand_image_patterns(patterns: Sequence[str]) -> List[str]:
    """Expand glob masks, keep order, drop duplicates."""
    result: List[str] = []
    for p in patterns:
        expanded = glob.glob(p)
        result.extend(sorted(expanded) if expanded else [p])
    seen = set()
    uniq: List[str] = []
    for p in result:
        if p not in seen:
            seen.add(p)
            uniq.append(p)
    return uniq


def parse_tag_arg(value: str) -> Tuple[int, Tag]:
    """``"2:Alice@10,20"`` -> ``(2, Tag(10, 20, "Alice"))``."""
    m = TAG_RE.match(value or "")
    if not m:
        raise argparse.ArgumentTypeError(f"invalid tag {value!r}; expected N:NAME@X,Y")
    index, name, x, y = int(m.group(1)), m.group(2), int(m.group(3)), int(m.group(4))
    if index < 1:
        raise argparse.ArgumentTypeError(f"invalid tag {value!r}; image index starts at 1")
    try:
        return index, Tag(x=x, y=y, name=name)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid tag {value!r}: {e}") from e


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="body-language-analyst",
        description="Analyze the body language in photos with an OpenAI-compatible vision model.",
    )
    parser.add_argument("images", nargs="+", help="Image file paths (glob masks like '*.jpg' are expanded).")
    parser.add_argument("-c", "--context", default="", help="Free-text context about the scene.")
    parser.add_argument(
        "--tag",
        dest="tags",
        action="append",
        type=parse_tag_arg,
        default=[],
        metavar="N:NAME@X,Y",
        help="Name a person in image N (1-based) at pixel X,Y. Repeatable.",
    )
    parser.add_argument("-p", "--prompt-file", dest="prompt_file", help="Override PROMPT_FILE (system instruction).")
    parser.add_argument("-k", "--api-key", dest="api_key", help="Override OPENAI_API_KEY.")
    parser.add_argument("-u", "--base-url", dest="base_url", help="Override OPENAI_BASE_URL.")
    parser.add_argument("-m", "--model", dest="model", help="Override OPENAI_MODEL.")
    parser.add_argument("--provider", choices=("openai", "http"), help="Override ANALYST_PROVIDER.")
    parser.add_argument("-o", "--output", help="Write the markdown analysis to this file instead of stdout.")
    parser.add_argument("--print-prompt", action="store_true", help="Print the assembled prompt and exit.")
    parser.add_argument("--debug", action="store_true", help="Verbose diagnostics on stderr.")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress informational logs.")
    return parser.parse_args(argv)


def load_images(paths: Sequence[str], quiet: bool) -> List[Tuple[int, TaggedImage]]:
    """Load each path; returns ``(position, image)`` pairs, position 1-based in ``paths``."""
    loaded: List[Tuple[int, TaggedImage]] = []
    failed: List[str] = []
    for position, p in enumerate(paths, start=1):
        try:
            loaded.append((position, load_image_file(p)))
        except ImageReadError as e:
            log(str(e), quiet)
            failed.append(p)
    if failed:
        print(f"WARNING: skipped {len(failed)} unreadable file(s): {', '.join(failed)}", file=sys.stderr)
    return loaded


def apply_tags(loaded: Sequence[Tuple[int, TaggedImage]], tags: Sequence[Tuple[int, Tag]]) -> Tuple[TaggedImage, ...]:
    # N in --tag N:... is the file's position on the command line, skipped files included
    result = tuple(img for _, img in loaded)
    by_index: Dict[int, str] = {position: img.id for position, img in loaded}
    for index, tag in tags:
        if index not in by_index:
            print(f"WARNING: tag {tag.name!r} refers to image {index}, which was not loaded", file=sys.stderr)
            continue
        result = add_tag(result, by_index[index], tag)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        cfg = load_config(require_api_key=not args.print_prompt and not args.api_key)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.api_key:
        cfg.api_key = args.api_key
    if args.base_url:
        cfg.base_url = args.base_url
    if args.model:
        cfg.model = args.model
    if args.provider:
        cfg.provider = args.provider
    if args.prompt_file:
        cfg.prompt_file = args.prompt_file
    if args.debug:
        cfg.debug = True

    paths = expand_image_patterns(args.images)
    log(f"Model: {cfg.model}", args.quiet)
    log(f"Files: {len(paths)}", args.quiet)
    images = apply_tags(load_images(paths, args.quiet), args.tags)
    if not images:
        print("No readable images to analyze.", file=sys.stderr)
        return 1

    if args.print_prompt:
        print(build_prompt(args.context, images).text)
        return 0

    try:
        provider = get_provider(cfg)
    except ValueError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    log("Analyzing...", args.quiet)
    result = AnalyzerService(provider).analyze_images(cfg, args.context, images)
    if isinstance(result, AnalysisFailure):
        print(f"ERROR: {result.reason}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result.text)
        log(f"Saved analysis to {args.output}", args.quiet)
    else:
        print(result.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
