"""
Localized display names.

Resolution never fails: when a record (or the reference to it) cannot be resolved,
or carries no entry for the requested language, the canonical slug is used.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Type

from pokemon_tools.errors import PokeLookupError
from pokemon_tools.models import (
    Name,
    NamedAPIResource,
    NamedRecord,
    Pokemon,
    PokemonForm,
    PokemonSpecies,
)

logger = logging.getLogger(__name__)


def localized_name(names: List[Name], language: str) -> Optional[str]:
    """Returns the entry for `language`, the last one winning if there are several."""
    result = None
    for entry in names:
        if entry.language.name == language:
            result = entry.name
    return result


def resolve_name(record: NamedRecord, language: str) -> str:
    """Display name of a record already in hand."""
    return localized_name(record.names, language) or record.name


async def follow_name(
    client, ref: NamedAPIResource, language: str, model: Type[NamedRecord] = NamedRecord
) -> str:
    """Display name of a referenced record, fetched first as `model`."""
    try:
        record = await client.follow(ref, model)
    except PokeLookupError as e:
        logger.debug("name lookup for %s fell back to slug: %s", ref.name, e)
        return ref.name
    return resolve_name(record, language)


async def display_name(fast: bool, slug: str, produce: Callable[[], Awaitable[str]]) -> str:
    """Skips `produce` entirely in fast mode and uses the slug instead."""
    if fast:
        return slug
    return await produce()


async def ref_name(
    client,
    ref: NamedAPIResource,
    language: str,
    fast: bool,
    model: Type[NamedRecord] = NamedRecord,
) -> str:
    return await display_name(fast, ref.name, lambda: follow_name(client, ref, language, model))


async def pokemon_name(client, pokemon: Pokemon, language: str) -> str:
    """
    Display name of a creature.

    Prefers the name of its default form when that form is localized at all (regional
    and other forms carry their own names), then the species name, then the slug.
    """
    try:
        forms = await client.gather_all(client.follow(f, PokemonForm) for f in pokemon.forms)
    except PokeLookupError as e:
        logger.debug("forms of %s unavailable: %s", pokemon.name, e)
        return pokemon.name

    for form in forms:
        if not form.is_default or not form.names:
            continue
        name = localized_name(form.names, language)
        if name is not None:
            return name
        break

    return await follow_name(client, pokemon.species, language, PokemonSpecies)
