"""Fetch normalised CMS content from the command line and print it as JSON."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from hotel_content.collections import ContentFetchers
from hotel_content.config.settings import Settings
from hotel_content.core.logging import configure_logging
from hotel_content.items.models import CollectionResult
from hotel_content.services.credentials import Credential, admin_credential, public_credential

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Read hotel website content from the CMS")
    parser.add_argument("--locale", default=None, help="Requested locale (defaults to CMS_DEFAULT_LOCALE)")
    parser.add_argument(
        "--fallback-locale",
        default=None,
        help="Locale used when a translation is missing (defaults to CMS_FALLBACK_LOCALE)",
    )
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Use the elevated admin token instead of the public token",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write JSON to this file instead of stdout")
    parser.add_argument(
        "--override",
        action="append",
        metavar="KEY=VALUE",
        help="Override a Settings attribute (repeatable). Values accept JSON literals.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    hotels = commands.add_parser("hotels", help="List published hotels")
    hotels.add_argument("--featured", action="store_true")
    hotels.add_argument("--destination", default=None, help="Destination slug")
    hotels.add_argument("--category", default=None)
    hotels.add_argument("--limit", type=int, default=None)
    hotels.add_argument("--offset", type=int, default=None)
    hotels.add_argument("--sort", default=None)

    hotel = commands.add_parser("hotel", help="Hotel detail with rooms")
    hotel.add_argument("slug")

    destinations = commands.add_parser("destinations", help="List published destinations")
    destinations.add_argument("--featured", action="store_true")
    destinations.add_argument("--limit", type=int, default=None)

    destination = commands.add_parser("destination", help="Destination detail with hotels")
    destination.add_argument("slug")

    categories = commands.add_parser("categories", help="List categories")
    categories.add_argument("--type", default=None, help="hotel, destination or both")
    categories.add_argument("--featured", action="store_true")

    page = commands.add_parser("page", help="Editorial page by slug")
    page.add_argument("slug")

    commands.add_parser("navigation", help="Main menu entries")
    commands.add_parser("translations", help="UI string translations")
    return parser


def _decode_override(value: str) -> object:
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        return value


def _collect_overrides(parser: argparse.ArgumentParser, entries: Optional[list[str]]) -> dict[str, object]:
    overrides: dict[str, object] = {}
    for entry in entries or []:
        if "=" not in entry:
            parser.error(f"Override must be in KEY=VALUE form (got '{entry}')")
        key, value = entry.split("=", 1)
        key = key.strip()
        if key not in Settings.model_fields:
            logger.warning("Ignoring unknown override '%s'", key)
            continue
        overrides[key] = _decode_override(value.strip())
    return overrides


def _check_locales(parser: argparse.ArgumentParser, args: argparse.Namespace, settings: Settings) -> None:
    for option, locale in (("--locale", args.locale), ("--fallback-locale", args.fallback_locale)):
        if locale and not settings.is_supported_locale(locale):
            parser.error(
                f"{option} {locale} is not supported (choose from {', '.join(settings.supported_locales)})"
            )


def _jsonable(result: Any) -> Any:
    if isinstance(result, CollectionResult):
        return result.to_dict()
    return result


async def run(args: argparse.Namespace, settings: Settings) -> Any:
    locale = args.locale or settings.default_locale
    fallback = args.fallback_locale or settings.fallback_locale
    credential: Credential = admin_credential(settings) if args.admin else public_credential(settings)

    async with ContentFetchers.from_settings(settings) as content:
        if args.command == "hotels":
            return await content.hotels.list_hotels(
                locale,
                credential,
                featured=True if args.featured else None,
                destination_slug=args.destination,
                category=args.category,
                limit=args.limit,
                offset=args.offset,
                sort=args.sort,
                fallback_locale=fallback,
            )
        if args.command == "hotel":
            return await content.hotels.fetch_by_slug(args.slug, locale, credential, fallback_locale=fallback)
        if args.command == "destinations":
            return await content.destinations.list_destinations(
                locale,
                credential,
                featured=True if args.featured else None,
                limit=args.limit,
                fallback_locale=fallback,
            )
        if args.command == "destination":
            return await content.destinations.fetch_by_slug(args.slug, locale, credential, fallback_locale=fallback)
        if args.command == "categories":
            return await content.categories.list_categories(
                locale,
                credential,
                type=args.type,
                featured=True if args.featured else None,
                fallback_locale=fallback,
            )
        if args.command == "page":
            return await content.pages.fetch_by_slug(args.slug, locale, credential, fallback_locale=fallback)
        if args.command == "navigation":
            return await content.navigation.entries(locale, credential, fallback_locale=fallback)
        if args.command == "translations":
            return await content.translations.strings(locale, credential)
    raise ValueError(f"Unknown command {args.command}")


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    settings = Settings(**_collect_overrides(parser, args.override))
    _check_locales(parser, args, settings)

    settings.ensure_directories()
    configure_logging(settings.log_level, settings.log_dir)
    logger.info("Reading %s from %s", args.command, settings.base_url)

    result = asyncio.run(run(args, settings))
    payload = json.dumps(_jsonable(result), ensure_ascii=False, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(payload + "\n", encoding="utf-8")
        logger.info("Wrote %s to %s", args.command, args.output)
    else:
        sys.stdout.write(payload + "\n")


if __name__ == "__main__":
    main()
