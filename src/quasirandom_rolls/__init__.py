"""
Weighted and unweighted item rolls driven by pseudorandom or quasirandom
sources: alias tables, R2 and Sobol point sequences, and item mapping.
"""

from .alias_table import (
    UNSET_ALIAS,
    AliasTable,
    AliasTableEntry,
    make_alias_table,
    sample_alias_table,
)
from .item_mapping import (
    InvalidWeights,
    float_to_item,
    float_to_weighted_item,
    linear_weights,
    normalize_weights,
)
from .point_generators import (
    Point,
    R2Additive,
    r2,
    r2_additive,
    ruler,
    sobol,
    sobol_at_index,
    sobol_direction_numbers,
)
from .scalar import (
    DEFAULT_SEED,
    GOLDEN_RATIO_CONJUGATE,
    PI_FRACT,
    SQRT2_FRACT,
    AdditiveRecurrence,
    WhiteNoise,
    fract,
)

__all__ = [
    "UNSET_ALIAS",
    "AliasTable",
    "AliasTableEntry",
    "make_alias_table",
    "sample_alias_table",
    "InvalidWeights",
    "float_to_item",
    "float_to_weighted_item",
    "linear_weights",
    "normalize_weights",
    "Point",
    "R2Additive",
    "r2",
    "r2_additive",
    "ruler",
    "sobol",
    "sobol_at_index",
    "sobol_direction_numbers",
    "DEFAULT_SEED",
    "GOLDEN_RATIO_CONJUGATE",
    "PI_FRACT",
    "SQRT2_FRACT",
    "AdditiveRecurrence",
    "WhiteNoise",
    "fract",
]
