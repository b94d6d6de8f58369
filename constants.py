"""
Stores shared constants for the infiltration models.
"""

# Design flow rate coefficients (A, B, C, D), EnergyPlus Input/Output Reference
BLAST_COEFFICIENTS = (0.606, 0.03636, 0.1177, 0.0)
DOE2_COEFFICIENTS = (0.0, 0.0, 0.224, 0.0)

# Effective leakage area stack coefficient, (L/s)^2/(cm^4 K), by number of storeys
STACK_COEFFICIENTS = {
    1: 0.000145,
    2: 0.000290,
    3: 0.000435,
}
MAX_TABULATED_STOREYS = 3

# Effective leakage area wind coefficient, (L/s)^2/(cm^4 (m/s)^2), by shelter class,
# for 1, 2 and 3+ storeys
WIND_COEFFICIENTS = {
    'no_obstructions': (0.000319, 0.000420, 0.000494),
    'isolated_rural': (0.000246, 0.000325, 0.000382),
    'urban': (0.000172, 0.000231, 0.000271),
    'large_lot_urban': (0.000104, 0.000137, 0.000161),
    'small_lot_urban': (0.000032, 0.000042, 0.000049),
}
