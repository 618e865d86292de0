"""In-memory stand-in for PokéAPI, plus builders for the JSON records it serves."""

import copy
import os
import sys
from typing import Dict, Iterable, Optional

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from pokemon_tools.errors import NotFound, UpstreamFetchFailed
from pokemon_tools.pokemon_client import PokemonAPIClient

BASE_URL = "https://pokeapi.test/api/v2"


def url(key: str) -> str:
    return f"{BASE_URL}/{key}/"


def ref(endpoint: str, slug: str) -> dict:
    return {"name": slug, "url": url(f"{endpoint}/{slug}")}


def names(localized: Optional[Dict[str, str]]) -> list:
    return [
        {"name": name, "language": ref("language", language)}
        for language, name in (localized or {}).items()
    ]


def detail(trigger: str, **conditions) -> dict:
    """An evolution detail; reference-valued conditions are passed as ref() dicts."""
    record = {"trigger": ref("evolution-trigger", trigger)}
    record.update(conditions)
    return record


def link(species: str, details: Iterable[dict] = (), evolves_to: Iterable[dict] = ()) -> dict:
    return {
        "is_baby": False,
        "species": ref("pokemon-species", species),
        "evolution_details": list(details),
        "evolves_to": list(evolves_to),
    }


class FakePokeAPI(PokemonAPIClient):
    """
    The real client with its HTTP layer replaced by a dictionary lookup.

    Records are keyed by their path below the API root, e.g. 'pokemon/toxel'.
    Unknown keys answer like a 404; keys passed to `fail` answer like a broken transport.
    """

    def __init__(self):
        super().__init__(base_url=BASE_URL, enable_cache=False)
        self.records: Dict[str, object] = {}
        self.failures = set()
        self.requested = []

    def _request(self, url: str):
        key = self._resource_key(url)
        self.requested.append(key)
        if key in self.failures:
            raise UpstreamFetchFailed(key)
        if key not in self.records:
            kind, _, subject = key.partition("/")
            raise NotFound(subject or key, kind=kind)
        return copy.deepcopy(self.records[key])

    def fail(self, key: str) -> None:
        self.failures.add(key)

    # --- Record builders ---

    def add_named(self, endpoint: str, slug: str, localized: Optional[Dict[str, str]] = None):
        self.records[f"{endpoint}/{slug}"] = {"name": slug, "names": names(localized)}

    def add_type(
        self,
        slug: str,
        localized: Optional[Dict[str, str]] = None,
        no_damage_from: Iterable[str] = (),
        half_damage_from: Iterable[str] = (),
        double_damage_from: Iterable[str] = (),
    ):
        self.records[f"type/{slug}"] = {
            "name": slug,
            "names": names(localized),
            "damage_relations": {
                "no_damage_from": [ref("type", t) for t in no_damage_from],
                "half_damage_from": [ref("type", t) for t in half_damage_from],
                "double_damage_from": [ref("type", t) for t in double_damage_from],
            },
        }

    def add_species(
        self,
        slug: str,
        localized: Optional[Dict[str, str]] = None,
        varieties: Optional[Iterable[str]] = None,
        gender_rate: int = -1,
        egg_groups: Iterable[str] = (),
        chain_id: Optional[int] = None,
    ):
        varieties = list(varieties) if varieties is not None else [slug]
        self.records[f"pokemon-species/{slug}"] = {
            "name": slug,
            "names": names(localized),
            "gender_rate": gender_rate,
            "egg_groups": [ref("egg-group", group) for group in egg_groups],
            "evolution_chain": {"url": url(f"evolution-chain/{chain_id}")}
            if chain_id is not None
            else None,
            "varieties": [
                {"is_default": index == 0, "pokemon": ref("pokemon", variety)}
                for index, variety in enumerate(varieties)
            ],
        }

    def add_form(self, slug: str, localized: Optional[Dict[str, str]] = None, is_default=True):
        self.records[f"pokemon-form/{slug}"] = {
            "name": slug,
            "names": names(localized),
            "is_default": is_default,
        }

    def add_pokemon(
        self,
        slug: str,
        species: Optional[str] = None,
        types: Iterable[str] = (),
        abilities: Iterable[tuple] = (),
        moves: Iterable[tuple] = (),
        forms: Optional[Iterable[str]] = None,
        encounters: Optional[list] = None,
    ):
        """
        `abilities` holds (slug, is_hidden) pairs and `moves` holds
        (slug, [(learn method, level, version group), ...]) pairs.
        """
        forms = list(forms) if forms is not None else [slug]
        self.records[f"pokemon/{slug}"] = {
            "name": slug,
            "species": ref("pokemon-species", species or slug),
            "forms": [ref("pokemon-form", form) for form in forms],
            "abilities": [
                {"is_hidden": hidden, "slot": index, "ability": ref("ability", ability)}
                for index, (ability, hidden) in enumerate(abilities, start=1)
            ],
            "types": [
                {"slot": index, "type": ref("type", t)} for index, t in enumerate(types, start=1)
            ],
            "moves": [
                {
                    "move": ref("move", move),
                    "version_group_details": [
                        {
                            "level_learned_at": level,
                            "move_learn_method": ref("move-learn-method", method),
                            "version_group": ref("version-group", group),
                        }
                        for method, level, group in learned
                    ],
                }
                for move, learned in moves
            ],
            "location_area_encounters": f"{BASE_URL}/pokemon/{slug}/encounters",
        }
        if encounters is not None:
            self.records[f"pokemon/{slug}/encounters"] = encounters

    def add_chain(self, chain_id: int, root: dict):
        self.records[f"evolution-chain/{chain_id}"] = {"id": chain_id, "chain": root}


def encounter(area: str, *versions: str) -> dict:
    return {
        "location_area": ref("location-area", area),
        "version_details": [
            {"version": ref("version", version), "max_chance": 10} for version in versions
        ],
    }
