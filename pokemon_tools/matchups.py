"""
Type matchups: which attacking types hit a one- or two-typed defender for 0x, 0.25x,
0.5x, 2x or 4x damage.
"""

from typing import Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, Field

from pokemon_tools.models import NamedAPIResource, TypeRelations
from pokemon_tools.render import RenderConfig, table_header, table_row

# (label in list mode, table header, bucket attribute)
SINGLE_COLUMNS: Tuple[Tuple[str, str, str], ...] = (
    ("0x", "*0", "zero"),
    ("0.5x", "*0.5", "half"),
    ("2x", "*2", "double"),
)
DUAL_COLUMNS: Tuple[Tuple[str, str, str], ...] = (
    ("0x", "*0", "zero"),
    ("0.25x", "*0.25", "quarter"),
    ("0.5x", "*0.5", "half"),
    ("2x", "*2", "double"),
    ("4x", "*4", "quad"),
)


class MatchupBuckets(BaseModel):
    """
    Attacking types per damage multiplier against one defender.

    After `padded()`, all five lists have the same length and an empty string marks
    the end of a bucket's entries.
    """

    zero: List[str] = Field(default_factory=list)
    quarter: List[str] = Field(default_factory=list)
    half: List[str] = Field(default_factory=list)
    double: List[str] = Field(default_factory=list)
    quad: List[str] = Field(default_factory=list)

    def padded(self) -> "MatchupBuckets":
        size = max(len(self.zero), len(self.quarter), len(self.half), len(self.double), len(self.quad))
        return MatchupBuckets(
            **{
                field: values + [""] * (size - len(values))
                for field, values in self.model_dump().items()
            }
        )

    def renamed(self, names: Mapping[str, str]) -> "MatchupBuckets":
        return MatchupBuckets(
            **{
                field: [names.get(slug, slug) for slug in values]
                for field, values in self.model_dump().items()
            }
        )

    def entries(self, field: str) -> List[str]:
        """Members of a bucket, up to the first padding placeholder."""
        result = []
        for value in getattr(self, field):
            if not value:
                break
            result.append(value)
        return result


def _slugs(refs: List[NamedAPIResource]) -> List[str]:
    return [ref.name for ref in refs]


def combine_relations(
    primary: TypeRelations, secondary: Optional[TypeRelations] = None
) -> MatchupBuckets:
    """
    Combines the damage relations of a defender's types, by type slug.

    The secondary type's sets are applied in the order immunities, resistances,
    weaknesses, so one immunity overrides any resistance or weakness.
    """
    zero = _slugs(primary.no_damage_from)
    half = _slugs(primary.half_damage_from)
    double = _slugs(primary.double_damage_from)
    quarter: List[str] = []
    quad: List[str] = []

    if secondary is not None:
        for name in _slugs(secondary.no_damage_from):
            if name in half:
                half.remove(name)
                zero.append(name)
            elif name in double:
                double.remove(name)
                zero.append(name)
            elif name not in zero:
                zero.append(name)

        for name in _slugs(secondary.half_damage_from):
            if name in half:
                half.remove(name)
                quarter.append(name)
            elif name in double:
                # 2x and 0.5x cancel out to neutral damage
                double.remove(name)
            elif name not in zero:
                half.append(name)

        for name in _slugs(secondary.double_damage_from):
            if name in half:
                half.remove(name)
            elif name in double:
                double.remove(name)
                quad.append(name)
            elif name not in zero:
                double.append(name)

    return MatchupBuckets(zero=zero, quarter=quarter, half=half, double=double, quad=quad)


def combine(
    primary: TypeRelations,
    secondary: Optional[TypeRelations] = None,
    names: Optional[Mapping[str, str]] = None,
) -> MatchupBuckets:
    """Combined buckets with display names, padded for tabular rendering."""
    buckets = combine_relations(primary, secondary)
    if names:
        buckets = buckets.renamed(names)
    return buckets.padded()


def referenced_types(
    primary: TypeRelations, secondary: Optional[TypeRelations] = None
) -> Dict[str, NamedAPIResource]:
    """Every attacking type mentioned by the relations that are read, keyed by slug."""
    refs: Dict[str, NamedAPIResource] = {}
    for relations in (primary, secondary):
        if relations is None:
            continue
        for ref in (
            relations.no_damage_from + relations.half_damage_from + relations.double_damage_from
        ):
            refs.setdefault(ref.name, ref)
    return refs


def render_table(buckets: MatchupBuckets, dual: bool, config: RenderConfig) -> List[str]:
    columns = DUAL_COLUMNS if dual else SINGLE_COLUMNS
    lines = table_header([header for _, header, _ in columns], config)
    fields = [field for _, _, field in columns]
    rows = zip(*(getattr(buckets, field) for field in fields))
    lines.extend(table_row(row, config) for row in rows)
    return lines


def render_list(title: str, buckets: MatchupBuckets, dual: bool) -> List[str]:
    columns = DUAL_COLUMNS if dual else SINGLE_COLUMNS
    lines = [f"{title}:"]
    add_separator = False
    for label, _, field in columns:
        entries = buckets.entries(field)
        if not entries:
            continue
        if add_separator:
            lines.append("")
        add_separator = True
        lines.append(f" - {label}:")
        lines.extend(f"   * {entry}" for entry in entries)
    return lines
