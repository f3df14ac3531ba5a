"""Run a workout analysis from a JSON request file and print the artifact."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from app.logging_config import configure_logging
from app.models.schemas import AnalysisRequest
from app.services.workout_analysis import WorkoutAnalysisService


logger = logging.getLogger("analyze_workouts")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("request_file", type=Path, help="JSON file with an AnalysisRequest body")
    parser.add_argument("--provider", help="AI provider (googlegemini, huggingface, anthropic)")
    parser.add_argument("--analysis-type", help="Override the request's analysis type")
    parser.add_argument("--locale", help="Override the request's locale (de, en)")
    parser.add_argument("--timeout", type=float, help="Backend deadline in seconds")
    return parser.parse_args(argv)


def load_request(args: argparse.Namespace) -> AnalysisRequest:
    with args.request_file.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    if args.analysis_type:
        payload["analysis_type"] = args.analysis_type
    if args.locale:
        payload["locale"] = args.locale
    return AnalysisRequest.model_validate(payload)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)

    try:
        request = load_request(args)
    except (OSError, json.JSONDecodeError, ValidationError) as err:
        logger.error("Invalid analysis request %s: %s", args.request_file, err)
        return 2

    service = WorkoutAnalysisService()
    artifact = asyncio.run(service.analyze(request, provider=args.provider, timeout=args.timeout))
    print(artifact.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
