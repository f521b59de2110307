"""xmp2pp3 command line converter.

Writes a RawTherapee profile next to every image edited in Lightroom.
"""

import argparse
import json
import logging
import os
import sys
import time
from typing import List, Optional

from xmp2pp3 import __version__
from xmp2pp3.kernel.system.config import (
    APP_CONFIG,
    generate_default_config,
    load_user_config,
)
from xmp2pp3.kernel.system.logging import get_logger, setup_logging
from xmp2pp3.services.conversion import (
    FileResult,
    FileStatus,
    process_directory,
    process_file,
)

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xmp2pp3",
        description="xmp2pp3 -- Lightroom edits to RawTherapee profiles",
        epilog="Example: xmp2pp3 --force ~/Pictures/2024/",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="FILE_OR_DIR",
        help="Images or directories (searched recursively)",
    )

    parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        default=None,
        help="Process files even if they are not marked as Lightroom files",
    )

    parser.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        default=False,
        help="Log the profiles instead of writing them",
    )

    parser.add_argument(
        "--dump-metadata",
        action="store_true",
        default=False,
        help="Log every metadata field read (implies --verbose)",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=None,
        help="Debug logging",
    )

    parser.add_argument(
        "--init-config",
        action="store_true",
        default=False,
        help=f"Generate default config at {APP_CONFIG.config_file} and exit",
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    return parser


def run_inputs(
    inputs: List[str], force: bool, dry_run: bool, dump_metadata: bool
) -> List[FileResult]:
    results: List[FileResult] = []
    options = dict(force=force, dry_run=dry_run, dump_metadata=dump_metadata)
    for input_path in inputs:
        path = os.path.abspath(input_path)
        if os.path.isdir(path):
            results.extend(process_directory(path, **options))
        elif os.path.isfile(path):
            results.append(process_file(path, **options))
        else:
            logger.error(f"Couldn't find {input_path}")
            results.append(FileResult(path, FileStatus.FAILED, "not found"))
    return results


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns 0 on success, 1 on failure."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.init_config:
        if generate_default_config(APP_CONFIG):
            print(f"Config created: {APP_CONFIG.config_file}", file=sys.stderr)
            return 0
        print(f"Config already exists: {APP_CONFIG.config_file}", file=sys.stderr)
        return 1

    try:
        user_config = load_user_config(APP_CONFIG)
    except (json.JSONDecodeError, OSError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Flags given on the command line win over the config file
    cli_defaults = {**APP_CONFIG.default_cli, **user_config.get("cli", {})}
    force = args.force if args.force is not None else bool(cli_defaults["force"])
    verbose = args.verbose if args.verbose is not None else bool(cli_defaults["verbose"])

    level = logging.DEBUG if (verbose or args.dump_metadata) else APP_CONFIG.log_level
    setup_logging(level)

    if not args.inputs:
        print("Error: No input files or directories given.", file=sys.stderr)
        return 1

    t_start = time.monotonic()
    results = run_inputs(args.inputs, force, args.dry_run, args.dump_metadata)

    counts = {status: 0 for status in FileStatus}
    for result in results:
        counts[result.status] += 1

    logger.info(
        f"Done in {time.monotonic() - t_start:.1f}s: "
        f"{counts[FileStatus.WRITTEN]} written, "
        f"{counts[FileStatus.UNCHANGED]} unchanged, "
        f"{counts[FileStatus.SKIPPED]} skipped, "
        f"{counts[FileStatus.FAILED]} failed"
    )

    if not results or counts[FileStatus.FAILED] > 0:
        return 1
    return 0


def cli_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
