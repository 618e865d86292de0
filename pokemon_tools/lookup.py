"""
Lookup operations.

Each operation fetches what it needs through the client, decorates slugs with localized
names unless `fast` is set, and returns the lines to print. An empty list means the
subject exists but has nothing to show.
"""

import logging
from typing import List, Optional

from pokemon_tools.errors import MalformedResponse, NotFound, PokeLookupError, UpstreamFetchFailed
from pokemon_tools.evolutions import hide_species, linearize
from pokemon_tools.matchups import combine, referenced_types, render_list, render_table
from pokemon_tools.models import (
    Ability,
    ChainLink,
    EggGroup,
    EvolutionChain,
    LocationArea,
    LocationAreaEncounterList,
    Move,
    NamedRecord,
    Pokemon,
    PokemonSpecies,
)
from pokemon_tools.models import Type as TypeRecord
from pokemon_tools.names import display_name, pokemon_name, ref_name, resolve_name
from pokemon_tools.render import RenderConfig

logger = logging.getLogger(__name__)

LEVEL_UP = "level-up"
# Size of a creature's active moveset
MOVESET_SIZE = 4


# --- Shared helpers ---


async def fetch_pokemon(client, pokemon: str) -> Pokemon:
    try:
        return await client.get_by_name(Pokemon, pokemon)
    except NotFound as e:
        raise NotFound(pokemon, kind="pokemon", suggestion=f"list {pokemon}") from e


async def fetch_species(client, species: str) -> PokemonSpecies:
    try:
        return await client.get_by_name(PokemonSpecies, species)
    except NotFound as e:
        raise NotFound(species, kind="pokemon species") from e


def record_name(record: NamedRecord, language: str, fast: bool) -> str:
    if fast:
        return record.name
    return resolve_name(record, language)


async def pokemon_title(client, pokemon: Pokemon, language: str, fast: bool) -> str:
    return await display_name(fast, pokemon.name, lambda: pokemon_name(client, pokemon, language))


def chain_members(root: ChainLink) -> List[ChainLink]:
    """Every node of an evolution tree, parents before their children."""
    members = [root]
    for child in root.evolves_to:
        members.extend(chain_members(child))
    return members


async def pokemon_from_chain(client, pokemon: str, recursive: bool) -> List[Pokemon]:
    """
    The creature itself or, when `recursive`, every variety of every species in its
    evolution family.
    """
    subject = await fetch_pokemon(client, pokemon)
    if not recursive:
        return [subject]

    try:
        species = await client.follow(subject.species, PokemonSpecies)
    except PokeLookupError as e:
        raise UpstreamFetchFailed(f"species for {subject.name}") from e
    if species.evolution_chain is None:
        return [subject]

    try:
        chain = await client.follow_url(species.evolution_chain.url, EvolutionChain)
    except PokeLookupError as e:
        raise UpstreamFetchFailed(f"evolution chain for {species.name}") from e

    result = []
    for member in chain_members(chain.chain):
        try:
            member_species = await client.follow(member.species, PokemonSpecies)
            varieties = await client.gather_all(
                client.follow(variety.pokemon, Pokemon) for variety in member_species.varieties
            )
        except PokeLookupError as e:
            raise UpstreamFetchFailed(f"varieties of {member.species.name}") from e
        result.extend(varieties)

    logger.debug("%s expands to %d creatures", pokemon, len(result))
    return result


# --- Operations ---


async def varieties(client, species: str, language: str, fast: bool = False) -> List[str]:
    record = await fetch_species(client, species)

    result = [f"{record_name(record, language, fast)}:"]
    result.extend(f" - {variety.pokemon.name}" for variety in record.varieties)
    return result


async def types(
    client, pokemon: str, language: str, fast: bool = False, recursive: bool = False
) -> List[str]:
    result = []
    for mon in await pokemon_from_chain(client, pokemon, recursive):
        type_names = await client.gather_all(
            ref_name(client, slot.type, language, fast, TypeRecord) for slot in mon.types
        )
        result.append(f"{await pokemon_title(client, mon, language, fast)}:")
        result.append(f"  {'/'.join(type_names)}")
    return result


async def abilities(
    client, pokemon: str, language: str, fast: bool = False, recursive: bool = False
) -> List[str]:
    result = []
    for mon in await pokemon_from_chain(client, pokemon, recursive):
        try:
            records = await client.gather_all(
                client.follow(slot.ability, Ability) for slot in mon.abilities
            )
        except PokeLookupError as e:
            raise UpstreamFetchFailed(f"abilities for {mon.name}") from e

        result.append(f"{await pokemon_title(client, mon, language, fast)}:")
        for index, (slot, record) in enumerate(zip(mon.abilities, records), start=1):
            name = record_name(record, language, fast)
            if slot.is_hidden:
                name += " (hidden)" if fast else " (Hidden)"
            result.append(f" {index}. {name}")
    return result


async def moves(
    client,
    pokemon: str,
    language: str,
    fast: bool = False,
    version_group: str = "scarlet-violet",
    level: Optional[int] = None,
) -> List[str]:
    """
    Level-up moveset in one version group, in ascending level order.

    With `level`, only the four most recent moves learned at or below it are kept.
    """
    mon = await fetch_pokemon(client, pokemon)

    learnset = []
    for entry in mon.moves:
        for details in entry.version_group_details:
            if details.move_learn_method.name != LEVEL_UP:
                continue
            if details.version_group.name != version_group:
                continue
            if level is not None and details.level_learned_at > level:
                continue
            learnset.append((entry.move, details.level_learned_at))

    if not learnset:
        return []

    # Stable sort keeps the API order among moves learned at the same level
    learnset.sort(key=lambda item: item[1], reverse=True)
    if level is not None:
        learnset = learnset[:MOVESET_SIZE]
    learnset.reverse()

    move_names = await client.gather_all(
        ref_name(client, move, language, fast, Move) for move, _ in learnset
    )

    result = [f"{await pokemon_title(client, mon, language, fast)}:"]
    result.extend(
        f" - {name} ({learned_at})" for name, (_, learned_at) in zip(move_names, learnset)
    )
    return result


async def eggs(client, species: str, language: str, fast: bool = False) -> List[str]:
    record = await fetch_species(client, species)
    if not record.egg_groups:
        return []

    try:
        groups = await client.gather_all(
            client.follow(group, EggGroup) for group in record.egg_groups
        )
    except PokeLookupError as e:
        raise UpstreamFetchFailed(f"egg groups for {record.name}") from e

    result = [f"{record_name(record, language, fast)}:"]
    result.extend(f" - {record_name(group, language, fast)}" for group in groups)
    return result


async def genders(client, species: str, language: str, fast: bool = False) -> List[str]:
    record = await fetch_species(client, species)

    result = [f"{record_name(record, language, fast)}:"]
    rate = record.gender_rate / 8 * 100
    if rate < 0:
        result.append(" Genderless")
    else:
        result.append(f" M: {100 - rate:>5.1f}%")
        result.append(f" F: {rate:>5.1f}%")
    return result


async def encounters(
    client,
    version: str,
    pokemon: str,
    language: str,
    fast: bool = False,
    recursive: bool = False,
) -> List[str]:
    """Location areas where each creature appears in `version`; creatures with none are skipped."""
    result = []
    for mon in await pokemon_from_chain(client, pokemon, recursive):
        try:
            records = await client.follow_url(
                mon.location_area_encounters, LocationAreaEncounterList
            )
        except MalformedResponse as e:
            raise MalformedResponse(f"encounters for {mon.name}") from e
        except PokeLookupError as e:
            raise UpstreamFetchFailed(f"encounters for {mon.name}") from e

        areas = [
            record.location_area
            for record in records
            if any(detail.version.name == version for detail in record.version_details)
        ]
        if not areas:
            continue

        area_names = await client.gather_all(
            ref_name(client, area, language, fast, LocationArea) for area in areas
        )
        result.append(f"{await pokemon_title(client, mon, language, fast)}:")
        result.extend(f" - {name}" for name in area_names)
    return result


async def evolutions(
    client,
    species: str,
    language: str,
    fast: bool = False,
    secret: bool = False,
    show_all: bool = False,
) -> List[str]:
    record = await fetch_species(client, species)

    if record.evolution_chain is None:
        lines = [record_name(record, language, fast)]
        return hide_species(lines) if secret else lines

    try:
        chain = await client.follow_url(record.evolution_chain.url, EvolutionChain)
    except PokeLookupError as e:
        raise UpstreamFetchFailed(f"evolution chain for {record.name}") from e

    return await linearize(
        client, chain.chain, language, fast=fast, secret=secret, show_all=show_all
    )


async def matchups(
    client,
    primary: str,
    secondary: Optional[str] = None,
    list_mode: bool = False,
    language: str = "en",
    fast: bool = False,
    config: Optional[RenderConfig] = None,
) -> List[str]:
    """Damage taken by a defender of the given type(s), as a table or as a list."""
    config = config or RenderConfig()

    records = []
    for type_name in [primary, secondary]:
        if type_name is None:
            continue
        try:
            records.append(await client.get_by_name(TypeRecord, type_name))
        except PokeLookupError as e:
            raise UpstreamFetchFailed(f"type {type_name}") from e

    relations = [record.damage_relations for record in records]
    refs = referenced_types(*relations)
    names = {}
    if not fast:
        resolved = await client.gather_all(
            ref_name(client, ref, language, fast, TypeRecord) for ref in refs.values()
        )
        names = dict(zip(refs.keys(), resolved))

    buckets = combine(*relations, names=names)
    dual = len(records) == 2
    if list_mode:
        title = "/".join(record_name(record, language, fast) for record in records)
        return render_list(title, buckets, dual)
    return render_table(buckets, dual, config)
