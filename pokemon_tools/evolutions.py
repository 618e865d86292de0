"""
Evolution chain linearization.

A chain is a tree rooted at the base species. Every root-to-leaf path, combined with
every documented method along each edge, becomes one line such as

    Eevee -> Use item (item: Water Stone) -> Vaporeon

Species names sit at the even positions of a line split on " -> ", methods at the
odd positions.
"""

import logging
from enum import StrEnum
from typing import Dict, List, Optional

from pydantic import BaseModel

from pokemon_tools.models import (
    ChainLink,
    EvolutionDetail,
    EvolutionTrigger,
    Item,
    Location,
    Move,
    NamedAPIResource,
    PokemonSpecies,
)
from pokemon_tools.models import Type as TypeRecord
from pokemon_tools.names import ref_name

logger = logging.getLogger(__name__)

SEPARATOR = " -> "
UNKNOWN_METHOD = "???"
SECRET_NAME = "MON"

# Chains whose regional forms evolve differently; every method is kept for them.
SHOW_ALL_SPECIES = frozenset(
    {"rattata", "sandshrew", "vulpix", "meowth", "cubone", "slowpoke", "darumaka"}
)


class ChainException(StrEnum):
    # The base species does not evolve in its default form: list it on its own as well.
    PREPEND_ROOT = "prepend_root"
    # Only one form of this species evolves further: keep the first stage as its own
    # line and start the onward paths at this species.
    RELABEL_FINAL = "relabel_final"
    # Only one form evolves further: keep the two-stage line next to the full one.
    DUPLICATE_FIRST = "duplicate_first"


CHAIN_EXCEPTIONS: Dict[str, ChainException] = {
    "sirfetchd": ChainException.PREPEND_ROOT,
    "overqwil": ChainException.PREPEND_ROOT,
    "cursola": ChainException.PREPEND_ROOT,
    "basculegion": ChainException.PREPEND_ROOT,
    "mr-mime": ChainException.RELABEL_FINAL,
    "linoone": ChainException.DUPLICATE_FIRST,
}

# Rendering order of evolution conditions
DETAIL_FIELDS = (
    "item",
    "gender",
    "known_move",
    "known_move_type",
    "location",
    "min_level",
    "min_happiness",
    "min_beauty",
    "min_affection",
    "needs_overworld_rain",
    "party_species",
    "party_type",
    "relative_physical_stats",
    "time_of_day",
    "trade_species",
    "turn_upside_down",
)
FLAG_FIELDS = frozenset({"needs_overworld_rain", "turn_upside_down"})
# Record kind behind each reference-valued condition
DETAIL_MODELS = {
    "item": Item,
    "known_move": Move,
    "known_move_type": TypeRecord,
    "location": Location,
    "party_species": PokemonSpecies,
    "party_type": TypeRecord,
    "trade_species": PokemonSpecies,
}


class EvolutionPath(BaseModel):
    segments: List[str]
    # Slug of the first-stage species this path goes through
    via: str
    # First path emitted for its (first-stage species, method) pair
    leads_branch: bool = False
    # False for "???" paths, which the exception table never rewrites
    documented: bool = True

    def render(self) -> str:
        return SEPARATOR.join(self.segments)


async def describe_detail(
    client, detail: EvolutionDetail, language: str, fast: bool
) -> Optional[str]:
    """Comma-joined conditions of one evolution method, or None if it has none."""
    parts: List[Optional[str]] = []
    pending = {}
    for key in DETAIL_FIELDS:
        value = getattr(detail, key)
        if key in FLAG_FIELDS:
            if value:
                parts.append(key)
        elif value is None or value == "":
            continue
        elif isinstance(value, NamedAPIResource):
            pending[len(parts)] = (
                key,
                ref_name(client, value, language, fast, DETAIL_MODELS[key]),
            )
            parts.append(None)
        else:
            parts.append(f"{key}: {value}")

    if not parts:
        return None

    names = await client.gather_all(aw for _, aw in pending.values())
    for (index, (key, _)), name in zip(pending.items(), names):
        parts[index] = f"{key}: {name}"
    return ", ".join(parts)


async def describe_method(client, detail: EvolutionDetail, language: str, fast: bool) -> str:
    trigger = await ref_name(client, detail.trigger, language, fast, EvolutionTrigger)
    summary = await describe_detail(client, detail, language, fast)
    if summary:
        return f"{trigger} ({summary})"
    return trigger


class ChainLinearizer:
    """Turns one evolution tree into ordered text lines."""

    def __init__(self, client, language: str, fast: bool = False, secret: bool = False):
        self.client = client
        self.language = language
        self.fast = fast
        self.secret = secret

    async def species_name(self, ref: NamedAPIResource) -> str:
        # Names about to be hidden are never fetched
        return await ref_name(
            self.client, ref, self.language, self.fast or self.secret, PokemonSpecies
        )

    async def method(self, detail: EvolutionDetail) -> str:
        return await describe_method(self.client, detail, self.language, self.fast)

    async def continuations(self, node: ChainLink) -> List[List[str]]:
        """Every [method, species, method, species, ...] tail below a non-root node."""
        tails = []
        for child in node.evolves_to:
            child_name = await self.species_name(child.species)
            below = await self.continuations(child)
            for detail in child.evolution_details:
                head = [await self.method(detail), child_name]
                if below:
                    tails.extend(head + tail for tail in below)
                else:
                    tails.append(head)
        return tails

    async def paths(self, root: ChainLink, root_name: str) -> List[EvolutionPath]:
        paths = []
        for child in root.evolves_to:
            child_name = await self.species_name(child.species)
            if not child.evolution_details:
                paths.append(
                    EvolutionPath(
                        segments=[root_name, UNKNOWN_METHOD, child_name],
                        via=child.species.name,
                        documented=False,
                    )
                )
                continue

            tails = await self.continuations(child)
            for detail in child.evolution_details:
                head = [root_name, await self.method(detail), child_name]
                if not tails:
                    paths.append(
                        EvolutionPath(segments=head, via=child.species.name, leads_branch=True)
                    )
                    continue
                for index, tail in enumerate(tails):
                    paths.append(
                        EvolutionPath(
                            segments=head + tail,
                            via=child.species.name,
                            leads_branch=index == 0,
                        )
                    )
        return paths

    async def linearize(self, root: ChainLink, show_all: bool = False) -> List[str]:
        root_name = await self.species_name(root.species)
        if not root.evolves_to:
            lines = [root_name]
        else:
            check_exception_shapes(root)
            paths = apply_chain_exceptions(await self.paths(root, root_name), root_name)
            lines = [path.render() for path in paths]

        if not show_all and root.species.name not in SHOW_ALL_SPECIES:
            lines = collapse_methods(lines)
        if self.secret:
            lines = hide_species(lines)
        return lines


async def linearize(
    client,
    root: ChainLink,
    language: str,
    fast: bool = False,
    secret: bool = False,
    show_all: bool = False,
) -> List[str]:
    linearizer = ChainLinearizer(client, language, fast=fast, secret=secret)
    return await linearizer.linearize(root, show_all=show_all)


def check_exception_shapes(root: ChainLink) -> None:
    """Warns when a species in the exception table no longer has the expected chain shape."""
    for child in root.evolves_to:
        kind = CHAIN_EXCEPTIONS.get(child.species.name)
        if kind is None:
            continue
        if kind is ChainException.PREPEND_ROOT and child.evolves_to:
            logger.warning(
                "%s was expected to be a final stage but evolves further; "
                "its chain exception may be stale",
                child.species.name,
            )
        elif kind is not ChainException.PREPEND_ROOT and not child.evolves_to:
            logger.warning(
                "%s was expected to evolve further but has no next stage; "
                "its chain exception may be stale",
                child.species.name,
            )


def apply_chain_exceptions(paths: List[EvolutionPath], root_name: str) -> List[EvolutionPath]:
    """Post-processes generic paths for species the chain data models ambiguously."""
    result: List[EvolutionPath] = []
    for path in paths:
        kind = CHAIN_EXCEPTIONS.get(path.via) if path.documented else None
        if kind is None:
            result.append(path)
            continue

        if path.leads_branch:
            if kind is ChainException.PREPEND_ROOT:
                extra = [root_name]
            else:
                extra = path.segments[:3]
            result.insert(0, EvolutionPath(segments=extra, via=path.via))

        if kind is ChainException.RELABEL_FINAL:
            path = path.model_copy(update={"segments": path.segments[2:]})
        result.append(path)
    return result


def species_path(line: str) -> List[str]:
    return line.split(SEPARATOR)[::2]


def collapse_methods(lines: List[str]) -> List[str]:
    """
    Keeps only the last line of each run of lines sharing the same species path.

    Assumes the source lists the newest method for a path last.
    """
    result: List[str] = []
    previous = None
    for line in lines:
        names = species_path(line)
        if result and names == previous:
            result[-1] = line
        else:
            result.append(line)
        previous = names
    return result


def hide_species(lines: List[str]) -> List[str]:
    result = []
    for line in lines:
        tokens = line.split(SEPARATOR)
        tokens[::2] = [SECRET_NAME] * len(tokens[::2])
        result.append(SEPARATOR.join(tokens))
    return result
