"""
Action records: martial arts, spells and tomes.
"""

from .martial_art import MartialArt
from .spell import Spell, Tome

__all__ = [
    "MartialArt",
    "Spell",
    "Tome",
]
