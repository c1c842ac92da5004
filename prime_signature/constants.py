# prime_signature/constants.py
"""
Prime Signature Constants

This module defines the fixed constants of the signature algorithm:

LAYER 1: Hash Folding
- HASH_MULTIPLIER: Multiplier of the wrapping fold (hash = hash*31 + value)
- MASK32 / INT32_SIGN: 32-bit wraparound masks

LAYER 2: Signature Sampling
- NUM_CIRCLE_SAMPLES: Unit-circle samples per signature (fingerprint length)
- HASH_SCALE: Scale applied to sample magnitudes before folding
- METADATA_MAX_DEGREE: Fitting ideals summarised in a signature (0..3)

LAYER 3: Defaults
- DEFAULT_ELL, DEFAULT_FIELD, DEFAULT_TOLERANCE, DEFAULT_TOP_K
- DEFAULT_MAX_PRIMES: Bound on distinct primes per module (2^r cost)
"""
import math


# =============================================================================
# LAYER 1: Hash Folding
# =============================================================================

HASH_MULTIPLIER = 31
MASK32 = 0xFFFFFFFF
INT32_SIGN = 0x80000000


# =============================================================================
# LAYER 2: Signature Sampling
# =============================================================================

NUM_CIRCLE_SAMPLES = 12
HASH_SCALE = 1000          # abs rounded to 3 decimals, folded as integer
METADATA_MAX_DEGREE = 3

# Coarse zero sieve on the unit circle
ZERO_THRESHOLD = 0.1
DEFAULT_ZERO_SAMPLES = 360

TWO_PI = 2 * math.pi


# =============================================================================
# LAYER 3: Defaults
# =============================================================================

DEFAULT_ELL = 2
DEFAULT_FIELD = "Q"
DEFAULT_TOLERANCE = 0.01
DEFAULT_TOP_K = 5

# Degree-0 ideal enumerates all 2^r subsets of the prime set
DEFAULT_MAX_PRIMES = 24

assert NUM_CIRCLE_SAMPLES > 0, "Signatures need at least one circle sample"
