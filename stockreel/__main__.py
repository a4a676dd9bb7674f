"""CLI entrypoint for clip acquisition.

Usage:
    python -m stockreel <term> [<term> ...] [--duration 30] [--cache-dir <dir>]
                        [--aspect portrait|landscape|square] [--clip-duration 5]
                        [--local-library <dir>] [--config config.yaml] [--json]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.table import Table

from stockreel.acquire.cache import cache_stats
from stockreel.acquire.errors import ConfigurationError
from stockreel.acquire.orchestrator import acquire_materials
from stockreel.config import StockReelConfig
from stockreel.types import AcquisitionResult, CacheStats, MaterialSource, VideoAspect
from stockreel.utils.http import HttpClient

console = Console()

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_MATERIAL = 2


def _build_summary_panel(result: AcquisitionResult, cache_dir: Path, stats: CacheStats) -> Panel:
    """Build a summary panel for the acquisition results."""
    lines = [
        f"[bold]Source:[/bold] {result.source.value}",
        f"[bold]Clips:[/bold] {len(result.paths)}",
        f"[bold]Candidates:[/bold] {result.candidates}",
        f"[bold]Failed downloads:[/bold] {result.failures}",
        f"[bold]Cache directory:[/bold] {cache_dir}",
        f"  {stats.files} files, {stats.total_mb:.1f} MB",
    ]
    if result.source == MaterialSource.remote:
        lines.insert(2, f"[bold]Covered duration:[/bold] {result.total_duration:.1f}s")
    style = "green" if result.paths else "red"
    return Panel("\n".join(lines), title="Acquisition Complete", border_style=style)


def _build_clip_table(result: AcquisitionResult) -> Table:
    """Build a table listing the acquired clips in order."""
    table = Table(title="Clips", show_lines=False)
    table.add_column("#", style="cyan", justify="right", width=4)
    table.add_column("File", style="bold")
    table.add_column("Size", justify="right", width=10)
    for i, path in enumerate(result.paths, start=1):
        size = path.stat().st_size if path.is_file() else 0
        table.add_row(str(i), str(path), f"{size / (1024 * 1024):.1f} MB")
    return table


def _apply_overrides(config: StockReelConfig, args: argparse.Namespace) -> None:
    acq = config.acquisition
    if args.duration is not None:
        acq.target_total_duration = args.duration
    if args.clip_duration is not None:
        acq.max_clip_duration = args.clip_duration
    if args.min_duration is not None:
        acq.min_clip_duration = args.min_duration
    if args.aspect is not None:
        acq.aspect = VideoAspect.from_label(args.aspect)
    if args.cache_dir is not None:
        acq.cache_dir = args.cache_dir
    if args.local_library is not None:
        acq.use_local_library = True
        acq.local_library_path = args.local_library


def main(argv: list[str] | None = None, http: HttpClient | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Acquire stock video clips for a set of search terms.",
        prog="python -m stockreel",
    )
    parser.add_argument("terms", nargs="+", help="Search terms, in priority order")
    parser.add_argument("--config", type=Path, default=None, help="StockReel config YAML")
    parser.add_argument(
        "--duration", "-d", type=float, default=None,
        help="Total seconds of material to acquire (default: 0, a single clip)",
    )
    parser.add_argument(
        "--clip-duration", type=float, default=None,
        help="Seconds each clip contributes (default: 5)",
    )
    parser.add_argument(
        "--min-duration", type=float, default=None,
        help="Minimum catalog clip length (default: --clip-duration)",
    )
    parser.add_argument(
        "--aspect", choices=[a.name for a in VideoAspect], default=None,
        help="Target aspect ratio (default: portrait)",
    )
    parser.add_argument("--cache-dir", type=Path, default=None, help="Download cache directory")
    parser.add_argument(
        "--local-library", type=Path, default=None,
        help="Use .mp4/.mov clips from this directory instead of searching",
    )
    parser.add_argument("--json", action="store_true", help="Output JSON summary")
    args = parser.parse_args(argv)

    # Configure logging so pipeline progress is visible
    if not args.json:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_time=True, show_path=False)],
        )
    else:
        logging.basicConfig(level=logging.WARNING)

    if args.config is not None and not args.config.is_file():
        console.print(f"[red]Error: {args.config} not found[/red]")
        return EXIT_ERROR

    config = StockReelConfig.from_yaml(args.config) if args.config else StockReelConfig.default()
    _apply_overrides(config, args)
    cache_dir = config.acquisition.cache_dir

    try:
        if args.json:
            result = acquire_materials(args.terms, config, http=http)
        else:
            with Progress(
                TextColumn("[bold]Acquiring clips"),
                BarColumn(),
                TextColumn("{task.completed:>3.0f}%"),
                console=console,
            ) as progress:
                task = progress.add_task("acquire", total=100, completed=0)
                result = acquire_materials(
                    args.terms,
                    config,
                    http=http,
                    on_progress=lambda value: progress.update(task, completed=value),
                )
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        return EXIT_ERROR

    stats = cache_stats(cache_dir)

    if args.json:
        data = result.to_dict()
        data["cache_dir"] = str(cache_dir)
        data["cache_files"] = stats.files
        data["cache_bytes"] = stats.total_bytes
        print(json.dumps(data, indent=2))
    else:
        console.print()
        console.print(_build_summary_panel(result, cache_dir, stats))
        if result.paths:
            console.print()
            console.print(_build_clip_table(result))
        console.print()

    return EXIT_OK if result.paths else EXIT_NO_MATERIAL


if __name__ == "__main__":
    sys.exit(main())
