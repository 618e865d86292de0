import unittest

from pokeapi_fakes import FakePokeAPI, ref
from pokemon_tools import lookup
from pokemon_tools.errors import UpstreamFetchFailed
from pokemon_tools.matchups import combine, combine_relations
from pokemon_tools.models import TypeRelations
from pokemon_tools.render import RenderConfig

TYPE_NAMES = {
    "normal": ("Normal", "Normal"),
    "fighting": ("Fighting", "Lucha"),
    "flying": ("Flying", "Volador"),
    "poison": ("Poison", "Veneno"),
    "ground": ("Ground", "Tierra"),
    "rock": ("Rock", "Roca"),
    "bug": ("Bug", "Bicho"),
    "steel": ("Steel", "Acero"),
    "fire": ("Fire", "Fuego"),
    "water": ("Water", "Agua"),
    "grass": ("Grass", "Planta"),
    "electric": ("Electric", "Eléctrico"),
    "psychic": ("Psychic", "Psíquico"),
    "ice": ("Ice", "Hielo"),
    "dragon": ("Dragon", "Dragón"),
    "dark": ("Dark", "Siniestro"),
    "fairy": ("Fairy", "Hada"),
}

# Damage taken by each defending type: (0x, 0.5x, 2x)
RELATIONS = {
    "fairy": (["dragon"], ["fighting", "bug", "dark"], ["poison", "steel"]),
    "steel": (
        ["poison"],
        ["normal", "flying", "rock", "bug", "steel", "grass", "psychic", "ice", "dragon", "fairy"],
        ["fighting", "ground", "fire"],
    ),
    "electric": ([], ["flying", "steel", "electric"], ["ground"]),
    "ground": (["electric"], ["poison", "rock"], ["water", "grass", "ice"]),
}


def relations(no=(), half=(), double=()):
    return TypeRelations(
        no_damage_from=[ref("type", t) for t in no],
        half_damage_from=[ref("type", t) for t in half],
        double_damage_from=[ref("type", t) for t in double],
    )


def columns(row, count):
    return [row[i * 13 : i * 13 + 12].strip() for i in range(count)]


class TestCombineRelations(unittest.TestCase):
    def test_single_type_keeps_its_sets(self):
        buckets = combine_relations(relations(*RELATIONS["fairy"]))
        self.assertEqual(buckets.zero, ["dragon"])
        self.assertEqual(buckets.half, ["fighting", "bug", "dark"])
        self.assertEqual(buckets.double, ["poison", "steel"])
        self.assertEqual(buckets.quarter, [])
        self.assertEqual(buckets.quad, [])

    def test_stacking_and_cancelling(self):
        buckets = combine_relations(
            relations(half=["fire", "water"], double=["grass", "ice"]),
            relations(half=["fire", "ice"], double=["grass", "water"]),
        )
        self.assertEqual(buckets.quarter, ["fire"])
        self.assertEqual(buckets.quad, ["grass"])
        # 2x against 0.5x is neutral, in either order
        self.assertNotIn("ice", buckets.half + buckets.double)
        self.assertNotIn("water", buckets.half + buckets.double)

    def test_immunity_overrides(self):
        buckets = combine_relations(
            relations(no=["ghost"], half=["poison"], double=["ground"]),
            relations(no=["ground", "poison"], half=["ghost"], double=["ghost"]),
        )
        self.assertEqual(buckets.zero, ["ghost", "ground", "poison"])
        self.assertEqual(buckets.half + buckets.double + buckets.quarter + buckets.quad, [])

    def test_no_type_lands_in_two_buckets(self):
        buckets = combine_relations(relations(*RELATIONS["fairy"]), relations(*RELATIONS["steel"]))
        seen = buckets.zero + buckets.quarter + buckets.half + buckets.double + buckets.quad
        self.assertEqual(len(seen), len(set(seen)))

    def test_padding_covers_every_bucket(self):
        buckets = combine(relations(*RELATIONS["electric"]), relations(*RELATIONS["ground"]))
        lengths = {
            len(getattr(buckets, field)) for field in ("zero", "quarter", "half", "double", "quad")
        }
        self.assertEqual(lengths, {4})
        self.assertEqual(buckets.quarter, ["", "", "", ""])


class TestMatchupLookup(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.api = FakePokeAPI()
        for slug, (en, es) in TYPE_NAMES.items():
            no, half, double = RELATIONS.get(slug, ((), (), ()))
            self.api.add_type(slug, {"en": en, "es": es}, no, half, double)

    async def test_single_type_table(self):
        lines = await lookup.matchups(self.api, "fairy", language="en")
        self.assertEqual(
            lines,
            [
                "     *0          *0.5          *2     ",
                "------------ ------------ ------------",
                "Dragon       Fighting     Poison      ",
                "             Bug          Steel       ",
                "             Dark         " + " " * 12,
            ],
        )

    async def test_dual_type_table(self):
        lines = await lookup.matchups(self.api, "electric", "ground", language="en")
        self.assertEqual(columns(lines[0], 5), ["*0", "*0.25", "*0.5", "*2", "*4"])
        rows = [columns(line, 5) for line in lines[2:]]
        self.assertEqual(
            rows,
            [
                ["Electric", "", "Flying", "Ground", ""],
                ["", "", "Steel", "Water", ""],
                ["", "", "Poison", "Grass", ""],
                ["", "", "Rock", "Ice", ""],
            ],
        )

    async def test_dual_type_list_in_spanish(self):
        lines = await lookup.matchups(self.api, "fairy", "steel", list_mode=True, language="es")
        self.assertEqual(
            lines,
            [
                "Hada/Acero:",
                " - 0x:",
                "   * Dragón",
                "   * Veneno",
                "",
                " - 0.25x:",
                "   * Bicho",
                "",
                " - 0.5x:",
                "   * Siniestro",
                "   * Normal",
                "   * Volador",
                "   * Roca",
                "   * Planta",
                "   * Psíquico",
                "   * Hielo",
                "   * Hada",
                "",
                " - 2x:",
                "   * Tierra",
                "   * Fuego",
            ],
        )

    async def test_fast_mode_uses_slugs(self):
        lines = await lookup.matchups(self.api, "fairy", list_mode=True, language="es", fast=True)
        self.assertEqual(lines[:3], ["fairy:", " - 0x:", "   * dragon"])

    async def test_column_width_is_configurable(self):
        config = RenderConfig(column_width=10)
        lines = await lookup.matchups(self.api, "fairy", language="en", config=config)
        self.assertEqual(lines[1], "---------- ---------- ----------")

    async def test_type_fetch_failure(self):
        self.api.fail("type/steel")
        with self.assertRaises(UpstreamFetchFailed) as ctx:
            await lookup.matchups(self.api, "fairy", "steel")
        self.assertEqual(ctx.exception.message, "API error: could not retrieve type steel")


if __name__ == "__main__":
    unittest.main()
