from __future__ import annotations

import argparse
import asyncio
import logging

from hotelsite.logging_config import configure_logging, parse_redact_fields
from hotelsite.presentation.runtime import create_theme_provider
from hotelsite.presentation.theme_provider import ThemeProvider, ThemeSnapshot
from hotelsite.settings import settings
from hotelsite.theme import THEMES

configure_logging(
    level=settings.log_level,
    log_format=settings.log_format,
    redact_fields=parse_redact_fields(settings.log_redact_fields),
    include_uvicorn_access=False,
)

logger = logging.getLogger(__name__)

THEME_CHOICES = [theme.slug.value for theme in THEMES]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect or change the site theme.")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("show", help="Print the effective and site-wide theme.")
    set_local = subparsers.add_parser("set-local", help="Store a personal theme preference.")
    set_local.add_argument("theme", choices=THEME_CHOICES)
    set_global = subparsers.add_parser(
        "set-global",
        help="Change the site-wide default theme (requires ADMIN_API_TOKEN).",
    )
    set_global.add_argument("theme", choices=THEME_CHOICES)
    watch = subparsers.add_parser(
        "watch",
        help="Follow preference changes written by other processes.",
    )
    watch.add_argument("--interval", type=float, default=1.0)
    return parser


async def watch_preferences(
    provider: ThemeProvider,
    *,
    interval: float,
    iterations: int | None = None,
) -> None:
    def report(snapshot: ThemeSnapshot) -> None:
        print(f"effective={snapshot.theme.value}", flush=True)

    unsubscribe = provider.subscribe(report)
    try:
        completed = 0
        while iterations is None or completed < iterations:
            await asyncio.sleep(interval)
            provider.reload_preferences()
            completed += 1
    finally:
        unsubscribe()


async def run(command: str, theme: str | None, *, interval: float = 1.0) -> int:
    provider = create_theme_provider(settings)
    provider.start()
    await provider.wait_ready()
    try:
        if command == "set-local":
            provider.set_theme(theme)
        elif command == "set-global":
            write = provider.set_global_theme(theme)
            if write is None or not await write:
                return 1
        elif command == "watch":
            await watch_preferences(provider, interval=interval)
        site_theme = provider.site_theme.value if provider.site_theme else "-"
        logger.info(
            "theme_admin.status",
            extra={
                "event": "theme_admin.status",
                "effective_theme": provider.current_theme.value,
                "site_theme": site_theme,
            },
        )
        print(f"effective={provider.current_theme.value} site={site_theme}")
        return 0
    finally:
        provider.close()


def main() -> int:
    args = _build_parser().parse_args()
    return asyncio.run(
        run(
            args.command,
            getattr(args, "theme", None),
            interval=getattr(args, "interval", 1.0),
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
