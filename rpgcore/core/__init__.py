"""
Core system module for the rules core.

Contains game constants, the error taxonomy, logging setup and shared
utilities used by every other package.
"""

from .errors import (
    ArchetypeDataError,
    InvalidActionError,
    InvalidArchetypeError,
    RulesError,
    UnknownArchetypeError,
)
from .logging import get_logger, setup_logging
from .utils import Singleton, get_rng, random_range, roll_chance

__all__ = [
    # Import from errors.py
    "ArchetypeDataError",
    "InvalidActionError",
    "InvalidArchetypeError",
    "RulesError",
    "UnknownArchetypeError",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "Singleton",
    "get_rng",
    "random_range",
    "roll_chance",
]
