#!/usr/bin/env python3
import sys
import json
import asyncio
import logging
import argparse
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import __version__, LOG_LEVEL
from .errors import ExtractionError, FetchError
from .extractor import EmbedExtractor
from .models import MappingEnvelope

CONSOLE = Console()
THEME = {"primary": "#7ebfbf", "secondary": "#9bd3d3", "accent": "#5fa3a3", "error": "#d97979"}


def setup_logging(verbose: bool = False):
    level = "DEBUG" if verbose else (LOG_LEVEL or "WARNING")
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aniembed",
        description="Find embed servers for an anime episode",
    )
    parser.add_argument("episode_id", nargs="?", help="Episode id, e.g. spy-x-family-3x1")
    parser.add_argument("--data-id", help="Numeric id from the metadata API")
    parser.add_argument("-s", "--season", type=int, help="Season number (with --data-id)")
    parser.add_argument("-e", "--episode", type=int, help="Episode number (with --data-id)")
    parser.add_argument("--json", action="store_true", help="Print the raw JSON envelope")
    parser.add_argument("--serve", action="store_true", help="Run the HTTP API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.add_argument("--version", action="version", version=f"aniembed {__version__}")
    return parser


class EmbedCLI:
    def __init__(self, extractor: Optional[EmbedExtractor] = None, console: Console = CONSOLE):
        self.extractor = extractor or EmbedExtractor()
        self.console = console

    def log(self, emoji: str, message: str, style: str = "dim"):
        self.console.print(f"[{style}]{emoji} {message}[/{style}]")

    async def lookup(self, args) -> MappingEnvelope:
        with Progress(
            SpinnerColumn("star"),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            progress.add_task(f"[{THEME['primary']}]Searching servers...", total=None)
            if args.data_id and args.episode:
                return await self.extractor.get_embed_by_data_id_and_episode(args.data_id, args.season, args.episode)
            if args.data_id:
                return await self.extractor.get_embed_by_data_id(args.data_id, args.season)
            return await self.extractor.get_embed_with_mapping(args.episode_id)

    def render(self, envelope: MappingEnvelope):
        mapping = envelope.external_api_mapping
        if mapping:
            lines = [f"[bold {THEME['secondary']}]{escape(mapping.title or 'Unknown')}[/bold {THEME['secondary']}]"]
            if mapping.anime_id:
                lines.append(f"[dim]Anime id[/dim]   {escape(mapping.anime_id)}")
            if mapping.data_id:
                lines.append(f"[dim]Data id[/dim]    {escape(mapping.data_id)}")
            if mapping.season:
                episode = f" · Episode {mapping.episode}" if mapping.episode else ""
                lines.append(f"[dim]Season[/dim]     {mapping.season}{episode}")
            if mapping.constructed_id:
                lines.append(f"[dim]Matched as[/dim] {escape(mapping.constructed_id)}")
            self.console.print(Panel("\n".join(lines), border_style=THEME["primary"], title=escape(envelope.id)))

        if not envelope.servers:
            self.log("✗", "No servers found", THEME["error"])
            return

        table = Table(border_style=THEME["accent"], header_style=f"bold {THEME['primary']}")
        table.add_column("#", justify="right")
        table.add_column("Server")
        table.add_column("Embed URL", overflow="fold")
        for server in envelope.servers:
            table.add_row(str(server.index), escape(server.name), escape(server.url))
        self.console.print(table)

    def run(self, args) -> int:
        try:
            envelope = asyncio.run(self.lookup(args))
        except (FetchError, ExtractionError) as e:
            self.log("✗", f"Failed to extract embed data: {escape(str(e))}", THEME["error"])
            return 1

        if args.json:
            self.console.print_json(json.dumps(envelope.to_json_dict()))
        else:
            self.render(envelope)
        return 0


def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.serve:
        from .api import serve
        serve(args.host, args.port)
        return

    if args.data_id:
        if not args.season or args.season < 1:
            parser.error("--season is required with --data-id")
        if args.episode is not None and args.episode < 1:
            parser.error("--episode must be a positive number")
    elif not args.episode_id:
        parser.error("an episode id or --data-id is required")

    sys.exit(EmbedCLI().run(args))


if __name__ == "__main__":
    main()
