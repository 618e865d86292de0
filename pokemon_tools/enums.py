"""Closed vocabularies accepted on the command line, using PokéAPI slugs as values."""

from enum import StrEnum


class LanguageId(StrEnum):
    JA_HRKT = "ja-Hrkt"
    ROOMAJI = "roomaji"
    KO = "ko"
    ZH_HANT = "zh-Hant"
    FR = "fr"
    DE = "de"
    ES = "es"
    IT = "it"
    EN = "en"
    CS = "cs"
    JA = "ja"
    ZH_HANS = "zh-Hans"
    PT_BR = "pt-BR"


class VersionGroup(StrEnum):
    RED_BLUE = "red-blue"
    YELLOW = "yellow"
    GOLD_SILVER = "gold-silver"
    CRYSTAL = "crystal"
    RUBY_SAPPHIRE = "ruby-sapphire"
    EMERALD = "emerald"
    FIRERED_LEAFGREEN = "firered-leafgreen"
    COLOSSEUM = "colosseum"
    XD = "xd"
    DIAMOND_PEARL = "diamond-pearl"
    PLATINUM = "platinum"
    HEARTGOLD_SOULSILVER = "heartgold-soulsilver"
    BLACK_WHITE = "black-white"
    BLACK_2_WHITE_2 = "black-2-white-2"
    X_Y = "x-y"
    OMEGA_RUBY_ALPHA_SAPPHIRE = "omega-ruby-alpha-sapphire"
    SUN_MOON = "sun-moon"
    ULTRA_SUN_ULTRA_MOON = "ultra-sun-ultra-moon"
    LETS_GO_PIKACHU_LETS_GO_EEVEE = "lets-go-pikachu-lets-go-eevee"
    SWORD_SHIELD = "sword-shield"
    THE_ISLE_OF_ARMOR = "the-isle-of-armor"
    THE_CROWN_TUNDRA = "the-crown-tundra"
    BRILLIANT_DIAMOND_SHINING_PEARL = "brilliant-diamond-shining-pearl"
    LEGENDS_ARCEUS = "legends-arceus"
    SCARLET_VIOLET = "scarlet-violet"
    THE_TEAL_MASK = "the-teal-mask"
    THE_INDIGO_DISK = "the-indigo-disk"
    LEGENDS_ZA = "legends-za"
    MEGA_DIMENSION = "mega-dimension"


class Version(StrEnum):
    RED = "red"
    BLUE = "blue"
    YELLOW = "yellow"
    GOLD = "gold"
    SILVER = "silver"
    CRYSTAL = "crystal"
    RUBY = "ruby"
    SAPPHIRE = "sapphire"
    EMERALD = "emerald"
    FIRERED = "firered"
    LEAFGREEN = "leafgreen"
    DIAMOND = "diamond"
    PEARL = "pearl"
    PLATINUM = "platinum"
    HEARTGOLD = "heartgold"
    SOULSILVER = "soulsilver"
    BLACK = "black"
    WHITE = "white"
    COLOSSEUM = "colosseum"
    XD = "xd"
    BLACK_2 = "black-2"
    WHITE_2 = "white-2"
    X = "x"
    Y = "y"
    OMEGA_RUBY = "omega-ruby"
    ALPHA_SAPPHIRE = "alpha-sapphire"
    SUN = "sun"
    MOON = "moon"
    ULTRA_SUN = "ultra-sun"
    ULTRA_MOON = "ultra-moon"
    LETS_GO_PIKACHU = "lets-go-pikachu"
    LETS_GO_EEVEE = "lets-go-eevee"
    SWORD = "sword"
    SHIELD = "shield"
    THE_ISLE_OF_ARMOR = "the-isle-of-armor"
    THE_CROWN_TUNDRA = "the-crown-tundra"
    BRILLIANT_DIAMOND = "brilliant-diamond"
    SHINING_PEARL = "shining-pearl"
    LEGENDS_ARCEUS = "legends-arceus"
    SCARLET = "scarlet"
    VIOLET = "violet"
    THE_TEAL_MASK = "the-teal-mask"
    THE_INDIGO_DISK = "the-indigo-disk"
    LEGENDS_ZA = "legends-za"
    MEGA_DIMENSION = "mega-dimension"


class Type(StrEnum):
    NORMAL = "normal"
    FIGHTING = "fighting"
    FLYING = "flying"
    POISON = "poison"
    GROUND = "ground"
    ROCK = "rock"
    BUG = "bug"
    GHOST = "ghost"
    STEEL = "steel"
    FIRE = "fire"
    WATER = "water"
    GRASS = "grass"
    ELECTRIC = "electric"
    PSYCHIC = "psychic"
    ICE = "ice"
    DRAGON = "dragon"
    DARK = "dark"
    FAIRY = "fairy"
