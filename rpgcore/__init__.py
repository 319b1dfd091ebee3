"""
Rules core package for the 8-bit RPG.

This package contains the deterministic rules engine: the archetype tables,
the stat and resource model, the progression engine, and the damage, healing
and combat resolution formulas.
"""
