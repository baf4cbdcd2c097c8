# Copyright (c) 2024 OpenMined
# SPDX-License-Identifier: Apache-2.0
"""Entry point for the config-store runner.

Usage:
    python -m config_store.runner < request.json > response.json

The runner reads one JSON request from stdin, runs the action or delivers
the event, and writes one JSON response to stdout.  Logs go to stderr.

Exit codes:
    0: Success
    1: Failure (error details in JSON output)
"""

from __future__ import annotations

import asyncio
import sys

from dotenv import load_dotenv

from config_store._internal.logconfig import setup_logging
from config_store.settings import Settings

from .executor import Executor
from .schema import RunnerInput, RunnerOutput


def main() -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    try:
        load_dotenv()
        settings = Settings.from_env()
        setup_logging(settings.log_level, settings.log_format)

        input_data = RunnerInput.model_validate_json(sys.stdin.read())

        executor = Executor(settings=settings)
        output = asyncio.run(executor.execute(input_data))

        print(output.model_dump_json())

        return 0 if output.success else 1

    except Exception as e:
        # Ensure we always output valid JSON, even on unexpected errors
        error_output = RunnerOutput(
            success=False,
            code=500,
            i18n="#INTERNAL_SERVER_ERROR",
            error=str(e),
            error_type=type(e).__name__,
        )
        print(error_output.model_dump_json())
        return 1


if __name__ == "__main__":
    sys.exit(main())
