# orchestration/cli_runner.py
"""Command-line runner for the story director."""

from __future__ import annotations

import argparse
import asyncio

import structlog
from pydantic import BaseModel

from config import ForkpointSettings
from config import settings as default_settings
from ingestion.text_loader import StoryFileError, read_story_file
from models import AnalysisRequest, ExpansionRequest
from orchestration.story_director import StoryDirector
from utils.logging import setup_logging

logger = structlog.get_logger(__name__)


async def _story_text(args: argparse.Namespace, settings: ForkpointSettings) -> str | None:
    if args.file:
        return await read_story_file(args.file, max_chars=settings.UPLOAD_MAX_CHARS)
    return args.text


async def _run(
    director: StoryDirector, args: argparse.Namespace, settings: ForkpointSettings
) -> BaseModel:
    try:
        story = await _story_text(args, settings)
        if args.command == "analyze":
            return await director.analyze(
                AnalysisRequest(
                    full_context=story,
                    short_memory=args.short_memory,
                    last_paragraph=args.last_paragraph,
                )
            )
        return await director.expand_path(
            ExpansionRequest(
                story_context=story,
                path_name=args.path_name,
                path_description=args.path_description,
            )
        )
    finally:
        await director.aclose()


def run(args: argparse.Namespace, settings: ForkpointSettings = default_settings) -> int:
    """Execute the requested command and print its result as JSON."""
    setup_logging(settings)
    director = StoryDirector.from_settings(settings)
    try:
        result = asyncio.run(_run(director, args, settings))
    except KeyboardInterrupt:
        logger.info("Forkpoint interrupted; shutting down.")
        return 130
    except (OSError, StoryFileError) as err:
        logger.error("Could not read story file: %s", err)
        return 2
    except Exception as main_err:  # pragma: no cover - entry point catch
        logger.critical(
            "Forkpoint encountered an unhandled exception: %s",
            main_err,
            exc_info=True,
        )
        return 1
    print(result.model_dump_json(indent=2))
    return 0
