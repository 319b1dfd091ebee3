"""
Item records used by the stat and damage formulas.
"""

from .equipment import Armor, Equipment, PowerRange, Shield, Weapon

__all__ = [
    "Armor",
    "Equipment",
    "PowerRange",
    "Shield",
    "Weapon",
]
