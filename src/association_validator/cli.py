"""CLI for running association validations against the remote API."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from .client import AssociationsClient, SchemaError, TransportError
from .config import Settings
from .logging_config import bind_run_context, configure_logging
from .models.enums import ApiMode
from .validation import ValidationPipeline, compare_results

logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_MISMATCH = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="association-validator",
        description="Validate company/contact/role associations",
    )
    subparsers = parser.add_subparsers(dest="command")

    execute = subparsers.add_parser(
        "execute-contact-validations",
        help="Execute contact validations against the dataset",
    )
    execute.add_argument("-t", "--test", action="store_true", help="set test mode")
    execute.add_argument(
        "--compare",
        action="store_true",
        help="compare the result with the expected answer (test mode only)",
    )
    execute.add_argument("--max-role-per-company", type=int, default=None)
    execute.add_argument("--max-role-per-contact", type=int, default=None)
    return parser


async def execute_contact_validations(
    settings: Settings,
    mode: ApiMode,
    compare: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> tuple[dict, int]:
    """
    Fetch, validate, submit and optionally compare.

    Returns:
        Tuple of (JSON summary, exit code)
    """
    pipeline = ValidationPipeline(settings)

    async with AssociationsClient.from_settings(settings, transport=transport) as client:
        dataset = await client.fetch_dataset(mode)
        result = pipeline.validate(dataset)
        await client.submit_results(result, mode)

        summary = {
            **result.to_payload(),
            **dataset.model_dump(by_alias=True),
        }
        exit_code = EXIT_OK

        if compare:
            expected = await client.fetch_expected_results()
            comparison = compare_results(result, expected)
            summary["comparison"] = comparison.to_dict()
            if not comparison.matches:
                exit_code = EXIT_MISMATCH

    return summary, exit_code


def main(argv: Optional[Sequence[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    mode = ApiMode.from_flag(args.test)

    try:
        settings = settings or Settings()
    except PydanticValidationError as e:
        # Environment is unusable; log with default settings
        configure_logging(Settings.model_construct())
        logger.error(
            "Invalid settings",
            errors=[
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ],
        )
        return EXIT_FAILURE

    configure_logging(settings)
    bind_run_context(command=args.command, mode=mode.value)

    overrides = {}
    if args.max_role_per_company is not None:
        overrides["MAX_ROLE_PER_COMPANY"] = args.max_role_per_company
    if args.max_role_per_contact is not None:
        overrides["MAX_ROLE_PER_CONTACT"] = args.max_role_per_contact
    if any(value < 0 for value in overrides.values()):
        parser.error("role limits must be >= 0")
    if overrides:
        settings = settings.model_copy(update=overrides)

    if args.compare and not args.test:
        parser.error("--compare requires --test")

    if not settings.API_USER_KEY:
        logger.error("API_USER_KEY is not configured")
        return EXIT_FAILURE

    try:
        summary, exit_code = asyncio.run(
            execute_contact_validations(
                settings,
                mode,
                compare=args.compare,
            )
        )
    except (TransportError, SchemaError) as e:
        logger.error("Contact validation run failed", error=str(e), details=e.details)
        return EXIT_FAILURE

    print(json.dumps(summary, indent=2))
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
