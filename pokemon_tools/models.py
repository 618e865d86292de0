"""
pydantic models for the PokéAPI v2 records the lookups consume.

Only the fields that are read are declared; everything else in a payload is ignored.
"""

from typing import ClassVar, List, Optional

from pydantic import BaseModel, Field, TypeAdapter


class NamedAPIResource(BaseModel):
    """Reference to another resource: its slug plus the URL to follow."""

    name: str = Field(description="Canonical identifier slug")
    url: str = Field(description="Absolute API URL of the referenced resource")


class APIResource(BaseModel):
    url: str


class Name(BaseModel):
    name: str = Field(description="Display name in the given language")
    language: NamedAPIResource


class NamedRecord(BaseModel):
    """Any resource with a canonical slug and localized display names."""

    ENDPOINT: ClassVar[str] = ""

    name: str
    names: List[Name] = Field(default_factory=list)


# --- Simple named resources ---


class Ability(NamedRecord):
    ENDPOINT: ClassVar[str] = "ability"


class EggGroup(NamedRecord):
    ENDPOINT: ClassVar[str] = "egg-group"


class Move(NamedRecord):
    ENDPOINT: ClassVar[str] = "move"


class EvolutionTrigger(NamedRecord):
    ENDPOINT: ClassVar[str] = "evolution-trigger"


class Item(NamedRecord):
    ENDPOINT: ClassVar[str] = "item"


class Location(NamedRecord):
    ENDPOINT: ClassVar[str] = "location"


class LocationArea(NamedRecord):
    ENDPOINT: ClassVar[str] = "location-area"


# --- Types ---


class TypeRelations(BaseModel):
    """Damage a defender of this type takes, by attacking type."""

    no_damage_from: List[NamedAPIResource] = Field(default_factory=list)
    half_damage_from: List[NamedAPIResource] = Field(default_factory=list)
    double_damage_from: List[NamedAPIResource] = Field(default_factory=list)


class Type(NamedRecord):
    ENDPOINT: ClassVar[str] = "type"

    damage_relations: TypeRelations = Field(default_factory=TypeRelations)


# --- Pokemon, forms and species ---


class PokemonAbility(BaseModel):
    is_hidden: bool = False
    slot: int = 1
    ability: NamedAPIResource


class PokemonType(BaseModel):
    slot: int = 1
    type: NamedAPIResource


class VersionGroupDetail(BaseModel):
    level_learned_at: int = 0
    move_learn_method: NamedAPIResource
    version_group: NamedAPIResource


class PokemonMove(BaseModel):
    move: NamedAPIResource
    version_group_details: List[VersionGroupDetail] = Field(default_factory=list)


class Pokemon(BaseModel):
    ENDPOINT: ClassVar[str] = "pokemon"

    name: str
    species: NamedAPIResource
    forms: List[NamedAPIResource] = Field(default_factory=list)
    abilities: List[PokemonAbility] = Field(default_factory=list)
    types: List[PokemonType] = Field(default_factory=list)
    moves: List[PokemonMove] = Field(default_factory=list)
    location_area_encounters: str = Field(
        default="", description="URL of the location-area encounter list"
    )


class PokemonForm(NamedRecord):
    ENDPOINT: ClassVar[str] = "pokemon-form"

    is_default: bool = False


class PokemonSpeciesVariety(BaseModel):
    is_default: bool = False
    pokemon: NamedAPIResource


class PokemonSpecies(NamedRecord):
    ENDPOINT: ClassVar[str] = "pokemon-species"

    gender_rate: int = Field(
        default=-1, description="Chance of being female in eighths; -1 for genderless"
    )
    egg_groups: List[NamedAPIResource] = Field(default_factory=list)
    evolution_chain: Optional[APIResource] = None
    varieties: List[PokemonSpeciesVariety] = Field(default_factory=list)


# --- Evolution chains ---


class EvolutionDetail(BaseModel):
    """One way to move along an evolution edge; any subset of conditions may be set."""

    trigger: NamedAPIResource
    item: Optional[NamedAPIResource] = None
    gender: Optional[int] = None
    known_move: Optional[NamedAPIResource] = None
    known_move_type: Optional[NamedAPIResource] = None
    location: Optional[NamedAPIResource] = None
    min_level: Optional[int] = None
    min_happiness: Optional[int] = None
    min_beauty: Optional[int] = None
    min_affection: Optional[int] = None
    needs_overworld_rain: bool = False
    party_species: Optional[NamedAPIResource] = None
    party_type: Optional[NamedAPIResource] = None
    relative_physical_stats: Optional[int] = None
    time_of_day: Optional[str] = ""
    trade_species: Optional[NamedAPIResource] = None
    turn_upside_down: bool = False


class ChainLink(BaseModel):
    is_baby: bool = False
    species: NamedAPIResource
    evolution_details: List[EvolutionDetail] = Field(default_factory=list)
    evolves_to: List["ChainLink"] = Field(default_factory=list)


class EvolutionChain(BaseModel):
    ENDPOINT: ClassVar[str] = "evolution-chain"

    id: int
    chain: ChainLink


# --- Encounters ---


class VersionEncounterDetail(BaseModel):
    version: NamedAPIResource
    max_chance: int = 0


class LocationAreaEncounter(BaseModel):
    location_area: NamedAPIResource
    version_details: List[VersionEncounterDetail] = Field(default_factory=list)


# The encounters endpoint answers with a bare JSON list
LocationAreaEncounterList = TypeAdapter(List[LocationAreaEncounter])
