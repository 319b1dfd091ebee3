"""
Constants and enumerations for the rules core.

Defines the closed enumerations the engine is built over (stats, races,
classes, creature subtypes, elements, ability tags) together with every
balance number used by the stat, formula, combat and progression modules.
"""

from enum import Enum


class NiceEnum(str, Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name


# =============================================================================
# STATS
# =============================================================================


class StatName(NiceEnum):
    """The five core stats."""

    STR = "STR"
    AGI = "AGI"
    MAG = "MAG"
    DEF = "DEF"
    CON = "CON"


# =============================================================================
# ARCHETYPE NAMES
# =============================================================================


class RaceName(NiceEnum):
    """Playable races."""

    HUMAN = "Human"
    ESPER = "Esper"
    CYBORG = "Cyborg"
    FAE = "Fae"


class ClassName(NiceEnum):
    """Playable classes."""

    WARRIOR = "Warrior"
    MAGE = "Mage"
    DEFENDER = "Defender"
    HEALER = "Healer"
    FREELANCER = "Freelancer"


class SubtypeName(NiceEnum):
    """Creature forms available to the shapeshifting race."""

    SLIME = "Slime"
    DINO = "Dino"
    WOLF = "Wolf"
    GOBLIN = "Goblin"
    SCORPION = "Scorpion"
    BEETLE = "Beetle"


class Element(NiceEnum):
    """Elements a spell, martial art or resistance can carry."""

    FIRE = "fire"
    ICE = "ice"
    THUNDER = "thunder"
    WIND = "wind"
    EARTH = "earth"
    WATER = "water"
    LIGHT = "light"
    DARK = "dark"


# =============================================================================
# ACTIONS AND EQUIPMENT
# =============================================================================


class DamageType(NiceEnum):
    """Categories of incoming damage."""

    MELEE = "melee"
    RANGED = "ranged"
    SPELL = "spell"


class WeaponType(NiceEnum):
    """Weapon families."""

    SWORD = "sword"
    KNIFE = "knife"
    AXE = "axe"
    SPEAR = "spear"
    BOW = "bow"
    CROSSBOW = "crossbow"
    THROWN = "thrown"
    STAFF = "staff"
    WAND = "wand"
    UNARMED = "unarmed"

    @property
    def is_magic(self) -> bool:
        """Whether the weapon is a magic focus (staff or wand)."""
        return self in (WeaponType.STAFF, WeaponType.WAND)

    @property
    def is_consumable(self) -> bool:
        """Whether each use of the weapon spends a charge."""
        return self == WeaponType.THROWN


class ArmorSlot(NiceEnum):
    """Slots where armor can be equipped."""

    HEAD = "head"
    BODY = "body"
    ARMS = "arms"
    LEGS = "legs"
    TORSO = "torso"
    BACK = "back"


class MartialArtType(NiceEnum):
    """Reach of a martial art."""

    MELEE = "melee"
    RANGED = "ranged"

    @property
    def damage_type(self) -> DamageType:
        """The damage category a hit of this type counts as."""
        if self == MartialArtType.RANGED:
            return DamageType.RANGED
        return DamageType.MELEE


class Targeting(NiceEnum):
    """Targeting modes for spells, martial arts and enemy attacks."""

    SINGLE = "single"
    MULTI = "multi"
    AOE = "aoe"
    ALL = "all"
    SELF = "self"
    ALLY = "ally"
    ALL_ALLIES = "all_allies"

    @property
    def is_multi_target(self) -> bool:
        return self in (
            Targeting.MULTI,
            Targeting.AOE,
            Targeting.ALL,
            Targeting.ALL_ALLIES,
        )


class SpellKind(NiceEnum):
    """What a spell does when cast."""

    DAMAGE = "damage"
    HEALING = "healing"
    BUFF = "buff"
    DEBUFF = "debuff"
    STATUS = "status"


class StatusEffect(NiceEnum):
    """Status conditions a combatant can carry."""

    POISON = "poison"
    DARK = "dark"
    PARALYSIS = "paralysis"
    SLEEP = "sleep"
    SILENCE = "silence"
    BLIND = "blind"
    SLOW = "slow"
    HASTE = "haste"
    REGEN = "regen"
    PROTECT = "protect"
    SHELL = "shell"
    BERSERK = "berserk"


class Stance(NiceEnum):
    """Temporary combat stances."""

    NONE = "none"
    CONCENTRATE = "concentrate"
    FOCUS = "focus"
    BRACE = "brace"


# =============================================================================
# CAPABILITY TAGS
# =============================================================================


class WeaknessType(NiceEnum):
    """Race weaknesses, each worth a 1.5x damage multiplier."""

    CONSUMABLE = "consumable"
    MELEE = "melee"
    MAGIC = "magic"
    RANGED = "ranged"

    @property
    def description(self) -> str:
        return {
            WeaknessType.CONSUMABLE: "Takes 1.5x damage from consumable weapons",
            WeaknessType.MELEE: "Takes 1.5x damage from melee attacks",
            WeaknessType.MAGIC: "Takes 1.5x damage from magic attacks",
            WeaknessType.RANGED: "Takes 1.5x damage from ranged attacks",
        }[self]


class RaceTrait(NiceEnum):
    """Race-specific traits."""

    EXTRA_SPELL_SLOT = "extra_spell_slot"
    SPELL_CRIT_BONUS = "spell_crit_bonus"
    SPELL_DAMAGE_DOUBLE = "spell_damage_double"
    NO_MARTIAL_ARTS = "no_martial_arts"
    DUAL_WIELD = "dual_wield"
    GEAR_DEPENDENT = "gear_dependent"
    SHOP_UPGRADES = "shop_upgrades"
    MP_CAPPED = "mp_capped"
    NO_STAVES_WANDS = "no_staves_wands"
    CONSUMABLE_SAVE = "consumable_save"
    CONSUMABLE_CRIT = "consumable_crit"
    INFINITE_MARTIAL = "infinite_martial"
    DOUBLE_ATTACK = "double_attack"
    NO_TOMES = "no_tomes"
    HALF_WEAPON_DAMAGE = "half_weapon_damage"
    DEF_FROM_ARMOR_IGNORED = "def_from_armor_ignored"
    SUBTYPE_DEPENDENT = "subtype_dependent"

    @property
    def description(self) -> str:
        return {
            RaceTrait.EXTRA_SPELL_SLOT: "+1 spell and +1 tome slot",
            RaceTrait.SPELL_CRIT_BONUS: "+25% critical damage on spells and tomes",
            RaceTrait.SPELL_DAMAGE_DOUBLE: "Spells and tomes deal 2x damage",
            RaceTrait.NO_MARTIAL_ARTS: "Cannot use martial arts",
            RaceTrait.DUAL_WIELD: "Can equip 2 weapons and 2 shields",
            RaceTrait.GEAR_DEPENDENT: "Stats come entirely from equipped gear",
            RaceTrait.SHOP_UPGRADES: "Can buy +10 to any stat for 500 gold at shops",
            RaceTrait.MP_CAPPED: "MP capped at 50",
            RaceTrait.NO_STAVES_WANDS: "Cannot use staves or wands",
            RaceTrait.CONSUMABLE_SAVE: "25% chance not to consume a use on consumables",
            RaceTrait.CONSUMABLE_CRIT: "2x critical damage on consumable weapons",
            RaceTrait.INFINITE_MARTIAL: "Martial arts have infinite uses (regenerate at hotel)",
            RaceTrait.DOUBLE_ATTACK: "25% chance for double attack with martial arts",
            RaceTrait.NO_TOMES: "Cannot use tomes",
            RaceTrait.HALF_WEAPON_DAMAGE: "Deal half damage with melee and ranged weapons",
            RaceTrait.DEF_FROM_ARMOR_IGNORED: 'Armor DEF bonus is ignored (shows as "X")',
            RaceTrait.SUBTYPE_DEPENDENT: "Stats depend on current subtype",
        }[self]


class ClassAbility(NiceEnum):
    """Class abilities and passives."""

    HIGH_CRIT = "high_crit"
    UNARMED_BONUS = "unarmed_bonus"
    SPELL_POWER = "spell_power"
    CONCENTRATE = "concentrate"
    FOCUS = "focus"
    EXTRA_SLOTS = "extra_slots"
    DOUBLE_TOME_USES = "double_tome_uses"
    COVER = "cover"
    BRACE = "brace"
    THORNS = "thorns"
    REFLECT = "reflect"
    RANGED_NEGATE = "ranged_negate"
    COUNTER_MARTIAL = "counter_martial"
    DOUBLE_HEALING = "double_healing"
    ELEMENTAL_RESIST = "elemental_resist"
    HEAL_BONUS = "heal_bonus"
    REVIVE = "revive"
    AVOID = "avoid"
    STATUS_IMMUNE = "status_immune"
    MARTIAL_DOUBLE_USES = "martial_double_uses"
    ALL_PASSIVES = "all_passives"

    @property
    def description(self) -> str:
        return {
            ClassAbility.HIGH_CRIT: "50% critical chance with melee or ranged weapons",
            ClassAbility.UNARMED_BONUS: "1.5x damage with unarmed martial arts",
            ClassAbility.SPELL_POWER: "2x damage with attack spells",
            ClassAbility.CONCENTRATE: "Wand: Next spell is auto-critical (single target only)",
            ClassAbility.FOCUS: "Staff: Sacrifice turn, next spell deals 2.5x damage to all targets",
            ClassAbility.EXTRA_SLOTS: "+1 spell and +1 tome slot at start, +1 more every 10 levels",
            ClassAbility.DOUBLE_TOME_USES: "Tomes have double uses",
            ClassAbility.COVER: "Take damage for chosen ally if your AGI > enemy AGI",
            ClassAbility.BRACE: "Block 25-75% of all incoming damage for 1 turn",
            ClassAbility.THORNS: "25% chance to deal 50% damage back on enemy melee hits",
            ClassAbility.REFLECT: "10% chance to reflect 50% of spell damage",
            ClassAbility.RANGED_NEGATE: "25% chance to completely negate ranged attacks",
            ClassAbility.COUNTER_MARTIAL: "100% chance to counter martial arts for 100% damage",
            ClassAbility.DOUBLE_HEALING: "Receive double healing from all sources",
            ClassAbility.ELEMENTAL_RESIST: "+1% resistance to all elements per level",
            ClassAbility.HEAL_BONUS: "2x healing output on all healing spells",
            ClassAbility.REVIVE: "Revive spell restores ally to 50% HP",
            ClassAbility.AVOID: "1% dodge chance per 5 AGI points",
            ClassAbility.STATUS_IMMUNE: "Immune to dark and poison status effects",
            ClassAbility.MARTIAL_DOUBLE_USES: "Martial arts have double uses",
            ClassAbility.ALL_PASSIVES: "Has all other class passives at 75% potency",
        }[self]


class ClassRestriction(NiceEnum):
    """Class restrictions on equipment and abilities."""

    NO_MAGIC_WEAPONS = "no_magic_weapons"
    NO_MARTIAL_ARTS = "no_martial_arts"
    REDUCED_AGI = "reduced_agi"

    @property
    def description(self) -> str:
        return {
            ClassRestriction.NO_MAGIC_WEAPONS: "Cannot use staves or wands",
            ClassRestriction.NO_MARTIAL_ARTS: "Cannot use martial arts",
            ClassRestriction.REDUCED_AGI: "AGI reduced by 20%",
        }[self]


# =============================================================================
# STAT CAPS
# =============================================================================

MAX_STAT = 200
MAX_HP = 9999
MAX_MP = 9999
MAX_LEVEL = 50
# Effective MAG and absolute MP cap for the MP-capped race.
CYBORG_MAX_MP = 50

BASE_HP = 100
HP_PER_CON = 50
BASE_MP = 100
MP_PER_MAG = 50

# =============================================================================
# DAMAGE FORMULAS
# =============================================================================

DAMAGE_VARIANCE_MIN = 0.8
DAMAGE_VARIANCE_MAX = 1.2
SPELL_VARIANCE_MIN = 0.9
SPELL_VARIANCE_MAX = 1.1
WEAPON_STAT_DIVISOR = 2
MAX_DEFENSE_REDUCTION = MAX_STAT

MAGE_SPELL_DAMAGE_MULTIPLIER = 2
HEALER_HEAL_MULTIPLIER = 2
WARRIOR_UNARMED_MULTIPLIER = 1.5
MAGE_FOCUS_MULTIPLIER = 2.5
ESPER_SPELL_DAMAGE_MULTIPLIER = 2
FAE_WEAPON_DAMAGE_REDUCTION = 0.5
DEFENDER_HEAL_RECEIVED_MULTIPLIER = 2

RACE_WEAKNESS_MULTIPLIER = 1.5

# =============================================================================
# CRITICALS AND DODGE
# =============================================================================

BASE_CRIT_CHANCE = 0.05
CRIT_DAMAGE_MULTIPLIER = 2
WARRIOR_CRIT_CHANCE = 0.50
ESPER_CRIT_DAMAGE_BONUS = 0.25
CYBORG_CONSUMABLE_CRIT_MULTIPLIER = 2

DODGE_DIVISOR = 200
HEALER_DODGE_DIVISOR = 5

FREELANCER_PASSIVE_POTENCY = 0.75

# =============================================================================
# DEFENSIVE REACTIONS
# =============================================================================

DEFENDER_BRACE_MIN = 0.25
DEFENDER_BRACE_MAX = 0.75
DEFENDER_THORNS_CHANCE = 0.25
DEFENDER_THORNS_DAMAGE = 0.50
DEFENDER_REFLECT_CHANCE = 0.10
DEFENDER_REFLECT_DAMAGE = 0.50
DEFENDER_RANGED_NEGATE_CHANCE = 0.25
DEFENDER_COUNTER_CHANCE = 1.0
DEFENDER_COUNTER_DAMAGE = 1.0
DEFENDER_RESIST_PER_LEVEL = 0.01
DEFENDER_AGI_REDUCTION = 0.20

HEALER_REVIVE_HP_PERCENT = 0.50
HEALER_IMMUNE_STATUSES = (StatusEffect.DARK, StatusEffect.POISON)

# =============================================================================
# RACE MECHANICS
# =============================================================================

FAE_DOUBLE_ATTACK_CHANCE = 0.25

CYBORG_BASE_GEAR_SLOTS = 2
CYBORG_SLOT_UNLOCK_INTERVAL = 10
CYBORG_SLOT_UNLOCK_ORDER = (
    ArmorSlot.HEAD,
    ArmorSlot.BODY,
    ArmorSlot.ARMS,
    ArmorSlot.LEGS,
    ArmorSlot.TORSO,
    ArmorSlot.BACK,
)
CYBORG_CONSUMABLE_SAVE_CHANCE = 0.25

# =============================================================================
# PROGRESSION
# =============================================================================

DUNGEON_EXP_MULTIPLIER = 2
EXP_PER_ENEMY_LEVEL = 20
EXP_VARIANCE = 0.10
SLOT_UNLOCK_INTERVAL = 10
