"""pokelookup: look up Pokémon data from PokéAPI on the command line."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from pokemon_tools import lookup
from pokemon_tools.config import Settings
from pokemon_tools.enums import LanguageId, Type, Version, VersionGroup
from pokemon_tools.errors import PokeLookupError
from pokemon_tools.pokemon_client import PokemonAPIClient
from pokemon_tools.render import RenderConfig, tip

logger = logging.getLogger("pokelookup")

NO_RESULTS = "No results found."

EXAMPLES = """
Examples:
  pokelookup types -r pichu
  pokelookup moves quaxly --level 30
  pokelookup evolutions eevee --all --lang es
  pokelookup matchups fairy steel --list
"""


def normalize(value: str) -> str:
    """Turns user input such as 'Mr Mime' into the API slug 'mr-mime'."""
    return value.strip().lower().replace(" ", "-")


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f", "--fast", action="store_true", help="Print API slugs instead of localized names"
    )
    parser.add_argument(
        "-L",
        "--lang",
        choices=[language.value for language in LanguageId],
        default=None,
        help="Language of the displayed names (default: POKELOOKUP_LANG or en)",
    )


def _add_recursive(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-r",
        "--recursive",
        action="store_true",
        help="Include every form of every species in the evolution family",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pokelookup",
        description="Look up Pokémon data from PokéAPI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EXAMPLES,
    )
    parser.add_argument(
        "--cache-dir", type=Path, default=None, help="Cache directory (default: ~/.cache/pokelookup)"
    )
    parser.add_argument("--no-cache", action="store_true", help="Do not read or write the cache")
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")

    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    p = commands.add_parser("list", help="List the varieties of a species")
    p.add_argument("species", type=normalize)
    _add_common(p)

    p = commands.add_parser("types", help="Show the types of a Pokémon")
    p.add_argument("pokemon", type=normalize)
    _add_common(p)
    _add_recursive(p)

    p = commands.add_parser("abilities", help="Show the abilities of a Pokémon")
    p.add_argument("pokemon", type=normalize)
    _add_common(p)
    _add_recursive(p)

    p = commands.add_parser("moves", help="Show the level-up moves of a Pokémon")
    p.add_argument("pokemon", type=normalize)
    _add_common(p)
    p.add_argument(
        "-v",
        "--vgroup",
        type=normalize,
        choices=[group.value for group in VersionGroup],
        default=VersionGroup.SCARLET_VIOLET.value,
        help="Version group (default: scarlet-violet)",
    )
    p.add_argument(
        "-l", "--level", type=int, default=None, help="Show the 4 latest moves known at this level"
    )

    p = commands.add_parser("eggs", help="Show the egg groups of a species")
    p.add_argument("species", type=normalize)
    _add_common(p)

    p = commands.add_parser("genders", help="Show the gender ratio of a species")
    p.add_argument("species", type=normalize)
    _add_common(p)

    p = commands.add_parser("encounters", help="Show where a Pokémon can be found")
    p.add_argument("version", type=normalize, choices=[version.value for version in Version])
    p.add_argument("pokemon", type=normalize)
    _add_common(p)
    _add_recursive(p)

    p = commands.add_parser("evolutions", help="Show the evolution chain of a species")
    p.add_argument("species", type=normalize)
    _add_common(p)
    p.add_argument("-s", "--secret", action="store_true", help="Hide species names")
    p.add_argument(
        "-a", "--all", dest="show_all", action="store_true", help="Show every evolution method"
    )

    type_choices = [t.value for t in Type]
    p = commands.add_parser("matchups", help="Show damage taken by a type combination")
    p.add_argument("primary", type=normalize, choices=type_choices)
    p.add_argument("secondary", type=normalize, choices=type_choices, nargs="?", default=None)
    p.add_argument(
        "-l", "--list", dest="list_mode", action="store_true", help="Print a list instead of a table"
    )
    _add_common(p)

    return parser


async def run(
    args: argparse.Namespace, client: PokemonAPIClient, language: str, config: RenderConfig
) -> List[str]:
    """Dispatches the parsed command to its lookup operation."""
    fast = args.fast
    if args.command == "list":
        return await lookup.varieties(client, args.species, language, fast)
    if args.command == "types":
        return await lookup.types(client, args.pokemon, language, fast, args.recursive)
    if args.command == "abilities":
        return await lookup.abilities(client, args.pokemon, language, fast, args.recursive)
    if args.command == "moves":
        return await lookup.moves(client, args.pokemon, language, fast, args.vgroup, args.level)
    if args.command == "eggs":
        return await lookup.eggs(client, args.species, language, fast)
    if args.command == "genders":
        return await lookup.genders(client, args.species, language, fast)
    if args.command == "encounters":
        return await lookup.encounters(
            client, args.version, args.pokemon, language, fast, args.recursive
        )
    if args.command == "evolutions":
        return await lookup.evolutions(
            client, args.species, language, fast, secret=args.secret, show_all=args.show_all
        )
    if args.command == "matchups":
        return await lookup.matchups(
            client,
            args.primary,
            args.secondary,
            list_mode=args.list_mode,
            language=language,
            fast=fast,
            config=config,
        )
    raise ValueError(f"unknown command: {args.command}")


def main(argv: Optional[List[str]] = None, client: Optional[PokemonAPIClient] = None) -> int:
    args = build_parser().parse_args(argv)
    config = RenderConfig()

    try:
        settings = Settings.from_env()
    except ValidationError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.cache_dir is not None:
        settings.cache_dir = args.cache_dir
    if client is None:
        client = PokemonAPIClient.from_settings(settings, enable_cache=not args.no_cache)
    language = args.lang or settings.language

    try:
        lines = asyncio.run(run(args, client, language, config))
    except PokeLookupError as e:
        logger.debug("%s failed", args.command, exc_info=True)
        print(f"error: {e.message}", file=sys.stderr)
        suggestion = getattr(e, "suggestion", None)
        if suggestion:
            print(tip(suggestion, config), file=sys.stderr)
        return e.exit_code

    if not lines:
        print(NO_RESULTS)
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
