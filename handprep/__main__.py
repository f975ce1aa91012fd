"""Command-line entry point.

With no arguments the Flask service is started. Given image paths, each one
is validated and canonicalized, and accepted images are written next to the
source as ``<name>.canonical.png``.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_SETTINGS, SETTINGS, configure_logging
from .infrastructure.workers import PipelineWorkers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="handprep", description=__doc__.splitlines()[0])
    parser.add_argument("images", nargs="*", type=Path, help="Images to canonicalize")
    parser.add_argument("-o", "--output-dir", type=Path, help="Write outputs here instead of beside the source")
    parser.add_argument("--port", type=int, default=SETTINGS.port, help="Port for the HTTP service")
    return parser


def output_path(source: Path, output_dir: Optional[Path]) -> Path:
    directory = output_dir or source.parent
    return directory / f"{source.stem}.canonical.png"


def run_batch(images: List[Path], output_dir: Optional[Path] = None) -> int:
    """Process ``images`` concurrently; return the number that were rejected."""
    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)

    rejected = 0
    with PipelineWorkers(settings=DEFAULT_SETTINGS) as workers:
        results = workers.process_many(images)
    for source, result in zip(images, results):
        if result.ok:
            target = output_path(source, output_dir)
            target.write_bytes(result.data)
            print(f"{source}: ok -> {target}")
        else:
            rejected += 1
            reason = result.error.reason.value if result.error.reason else "error"
            print(f"{source}: rejected ({reason}) {result.error.message}")
    return rejected


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    if args.images:
        configure_logging()
        sys.exit(1 if run_batch(args.images, args.output_dir) else 0)

    from .app import create_app

    create_app().run(host="0.0.0.0", port=args.port, debug=False)


if __name__ == "__main__":
    main()
