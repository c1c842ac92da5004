"""
Alexander Module
================

Module-theoretic signature extraction for prime sets.

For a prime set S = {p_1, ..., p_r} the module builds synthetic group data,
derives Fitting ideals E_d on demand and condenses the Alexander
polynomial into a signature:

    primes -> E_0 (Alexander polynomial) -> 12 unit-circle samples -> hash

Degree-0 construction (fixed heuristic, reproduced exactly):
1. coefficient 0 and r are 1
2. coefficient i (0 < i < r) is the sum over all i-subsets of the product
   of Legendre signs over every pair p < q in the subset
3. the coefficients are symmetrized with half-up rounding

Cost is 2^r subsets, so r is bounded by ``max_primes``.
"""

from __future__ import annotations

import functools
import itertools
import logging
import math
import numbers
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .constants import (
    DEFAULT_ELL,
    DEFAULT_FIELD,
    DEFAULT_MAX_PRIMES,
    DEFAULT_TOLERANCE,
    HASH_SCALE,
    METADATA_MAX_DEGREE,
    NUM_CIRCLE_SAMPLES,
    TWO_PI,
)
from .crowell import CrowellSequence, GroupData
from .errors import InvalidInputError, ResourceLimitError
from .fitting import FittingIdeal
from .numeric import binomial, fold_hash_sequence, is_prime, legendre_symbol, round_half_up, to_uint32
from .polynomial import LaurentPolynomial, symmetrize

logger = logging.getLogger(__name__)


# =============================================================================
# SECTION 1: Signature Data Types
# =============================================================================

@dataclass(frozen=True)
class CharacteristicValue:
    """Alexander polynomial sampled at the k-th twelfth root of unity."""
    k: int
    theta: float
    re: float
    im: float
    abs: float

    def to_dict(self) -> Dict[str, Any]:
        return {'k': self.k, 'theta': self.theta, 'abs': self.abs, 're': self.re, 'im': self.im}


@dataclass(frozen=True)
class SignatureRecord:
    """
    Module signature of a prime set.

    Immutable once computed; ``hash`` is the unsigned 32-bit
    content-addressable key.
    """
    primes: Tuple[int, ...]
    ell: int
    field: str
    fitting_degrees: Dict[int, Dict[str, Any]]
    alexander_polynomial: str
    characteristic_values: Tuple[CharacteristicValue, ...]
    hash: int

    @property
    def fingerprint(self) -> Tuple[float, ...]:
        return tuple(cv.abs for cv in self.characteristic_values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'primes': list(self.primes),
            'ell': self.ell,
            'field': self.field,
            'fittingDegrees': {d: dict(info) for d, info in self.fitting_degrees.items()},
            'alexanderPolynomial': self.alexander_polynomial,
            'characteristicValues': [cv.to_dict() for cv in self.characteristic_values],
            'hash': self.hash
        }


def compute_signature_hash(primes: Sequence[int],
                           characteristic_values: Sequence[CharacteristicValue]) -> int:
    """
    Fold primes, then sample magnitudes (rounded to 3 decimals, x1000),
    into an unsigned 32-bit hash.
    """
    h = fold_hash_sequence(primes)
    h = fold_hash_sequence(
        (round_half_up(cv.abs * HASH_SCALE) for cv in characteristic_values), h
    )
    return to_uint32(h)


@functools.lru_cache(maxsize=None)
def _alternating_binomial(size: int) -> LaurentPolynomial:
    """sum_i (-1)^i C(size, i) t^i, i.e. (1 - t)^size."""
    return LaurentPolynomial([(-1) ** i * binomial(size, i) for i in range(size + 1)])


# =============================================================================
# SECTION 2: Alexander Module
# =============================================================================

class AlexanderModule:
    """
    Complete Alexander module A_psi of a prime set.

    Attributes:
        primes: Distinct primes, ascending
        r: Number of primes
        ell: Base prime (>= 2)
        field: Base field tag, informational only
        metadata: Creation time, prime product and prime sum
    """

    def __init__(self,
                 primes: Iterable[int],
                 ell: Optional[int] = None,
                 field: Optional[str] = None,
                 max_primes: int = DEFAULT_MAX_PRIMES):
        """
        Create an Alexander module for a prime set.

        Non-primes are dropped, duplicates removed and the rest sorted.

        Args:
            primes: Candidate primes, any order
            ell: Base prime (default 2)
            field: Base field tag (default 'Q')
            max_primes: Largest accepted number of distinct primes

        Raises:
            InvalidInputError: No primes remain, or ell < 2
            ResourceLimitError: More than ``max_primes`` distinct primes
        """
        candidates = list(primes)
        accepted = {int(p) for p in candidates if isinstance(p, numbers.Integral) and is_prime(int(p))}
        dropped = [p for p in candidates if not (isinstance(p, numbers.Integral) and is_prime(int(p)))]
        if dropped:
            logger.warning("Dropping non-prime inputs %s", dropped)

        self.primes: List[int] = sorted(accepted)
        self.r = len(self.primes)

        if self.r < 1:
            raise InvalidInputError(
                "AlexanderModule requires at least 1 prime",
                {'input': candidates}
            )
        if self.r > max_primes:
            raise ResourceLimitError(self.r, max_primes)

        self.ell = DEFAULT_ELL if ell is None else ell
        if self.ell < 2:
            raise InvalidInputError(f"ell must be >= 2, got {self.ell}", {'ell': self.ell})
        self.field = field or DEFAULT_FIELD

        self._group_data = GroupData.from_primes(self.primes)
        self._crowell_sequence: Optional[CrowellSequence] = None
        self._fitting_ideals: Dict[int, FittingIdeal] = {}
        self._signature: Optional[SignatureRecord] = None
        self._lock = threading.RLock()

        self.metadata = {
            'created': time.time(),
            'prime_product': math.prod(self.primes),
            'prime_sum': sum(self.primes)
        }

    @property
    def group_data(self) -> GroupData:
        return self._group_data

    @property
    def crowell_sequence(self) -> CrowellSequence:
        if self._crowell_sequence is None:
            self._crowell_sequence = CrowellSequence(self._group_data)
        return self._crowell_sequence

    # -------------------------------------------------------------------------
    # Fitting Ideals
    # -------------------------------------------------------------------------

    def compute_fitting_ideal(self, d: int) -> FittingIdeal:
        """
        d-th Fitting ideal E_d(A_psi), memoized per degree.

        Raises:
            InvalidInputError: d is negative
        """
        if d < 0:
            raise InvalidInputError(f"Fitting ideal degree must be >= 0, got {d}", {'degree': d})

        with self._lock:
            ideal = self._fitting_ideals.get(d)
            if ideal is None:
                ideal = self._compute_fitting(d)
                self._fitting_ideals[d] = ideal
                logger.debug("Computed E_%d for %s: %d generators",
                             d, self.primes, len(ideal.generators))
            return ideal

    def _compute_fitting(self, d: int) -> FittingIdeal:
        if d >= self.r:
            return FittingIdeal.unit(d)
        if d == 0:
            return FittingIdeal.principal(0, self._compute_alexander_polynomial())
        return FittingIdeal(d, self._compute_minors(self.r - d))

    def _compute_alexander_polynomial(self) -> LaurentPolynomial:
        if self.r == 1:
            return LaurentPolynomial.constant(1)

        coeffs = self._subset_sign_sums()
        coeffs[0] = 1
        coeffs[self.r] = 1
        return symmetrize(LaurentPolynomial([int(c) for c in coeffs]))

    def _subset_sign_sums(self) -> np.ndarray:
        """
        Sum of subset signs grouped by subset size.

        The sign of a subset is the product of legendre_symbol(p, q) over
        its pairs p < q. Subsets are bitmasks over the sorted primes; adding
        prime b to a subset S of lower primes multiplies the sign by
        prod_{j in S} legendre_symbol(p_j, p_b), so every table doubles
        once per prime.
        """
        signs = np.ones(1, dtype=np.int8)
        sizes = np.zeros(1, dtype=np.int16)
        for b, p in enumerate(self.primes):
            factor = np.ones(1, dtype=np.int8)
            for j in range(b):
                factor = np.concatenate([factor, factor * legendre_symbol(self.primes[j], p)])
            signs = np.concatenate([signs, signs * factor])
            sizes = np.concatenate([sizes, sizes + 1])

        positive = np.bincount(sizes[signs > 0], minlength=self.r + 1)
        negative = np.bincount(sizes[signs < 0], minlength=self.r + 1)
        return positive.astype(np.int64) - negative.astype(np.int64)

    def _compute_minors(self, size: int) -> List[LaurentPolynomial]:
        """One alternating-binomial minor per size-element subset of the primes."""
        generators = []
        for subset in itertools.combinations(self.primes, size):
            minor = _alternating_binomial(len(subset))
            if not minor.is_zero:
                generators.append(minor)

        if not generators:
            generators.append(LaurentPolynomial.constant(1))
        return generators

    @property
    def alexander_polynomial(self) -> LaurentPolynomial:
        """Alexander polynomial Delta_0(A_psi), normalized."""
        return self.compute_fitting_ideal(0).characteristic_polynomial

    def get_all_fitting_ideals(self, max_degree: int = METADATA_MAX_DEGREE) -> Dict[int, FittingIdeal]:
        return {d: self.compute_fitting_ideal(d) for d in range(max_degree + 1)}

    # -------------------------------------------------------------------------
    # Signature
    # -------------------------------------------------------------------------

    @property
    def signature(self) -> SignatureRecord:
        """Module signature, computed once."""
        with self._lock:
            if self._signature is None:
                self._signature = self._compute_signature()
                logger.debug("Signature for %s: %08x", self.primes, self._signature.hash)
            return self._signature

    def _compute_signature(self) -> SignatureRecord:
        fitting_ideals = self.get_all_fitting_ideals(METADATA_MAX_DEGREE)
        alex_poly = self.alexander_polynomial

        values = []
        for k in range(NUM_CIRCLE_SAMPLES):
            theta = (TWO_PI * k) / NUM_CIRCLE_SAMPLES
            val = alex_poly.evaluate_on_circle(theta)
            values.append(CharacteristicValue(k=k, theta=theta, re=val.re, im=val.im, abs=val.abs))

        return SignatureRecord(
            primes=tuple(self.primes),
            ell=self.ell,
            field=self.field,
            fitting_degrees={d: ideal.summary() for d, ideal in fitting_ideals.items()},
            alexander_polynomial=str(alex_poly),
            characteristic_values=tuple(values),
            hash=compute_signature_hash(self.primes, values)
        )

    @staticmethod
    def equivalent_signatures(sig1: SignatureRecord,
                              sig2: SignatureRecord,
                              tolerance: float = DEFAULT_TOLERANCE) -> bool:
        """
        Same prime count, same ell and every sample magnitude within
        ``tolerance``.
        """
        if len(sig1.primes) != len(sig2.primes):
            return False
        if sig1.ell != sig2.ell:
            return False
        if len(sig1.characteristic_values) != len(sig2.characteristic_values):
            return False

        return all(
            abs(v1.abs - v2.abs) <= tolerance
            for v1, v2 in zip(sig1.characteristic_values, sig2.characteristic_values)
        )

    @property
    def stats(self) -> Dict[str, Any]:
        sig = self.signature
        return {
            'num_primes': self.r,
            'ell': self.ell,
            'alexander_degree': self.alexander_polynomial.degree,
            'signature_hash': sig.hash,
            'mean_characteristic_value': float(np.mean(sig.fingerprint))
        }

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            'primes': list(self.primes),
            'ell': self.ell,
            'field': self.field,
            'alexanderPolynomial': str(self.alexander_polynomial),
            'signature': self.signature.to_dict(),
            'metadata': {
                'created': self.metadata['created'],
                'primeProduct': self.metadata['prime_product'],
                'primeSum': self.metadata['prime_sum']
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], max_primes: int = DEFAULT_MAX_PRIMES) -> 'AlexanderModule':
        """
        Rebuild from ``primes``/``ell``/``field``.

        Serialized polynomial and signature fields are ignored and
        recomputed.
        """
        if 'primes' not in data:
            raise InvalidInputError("Serialized module has no 'primes' field", {'keys': sorted(data)})
        return cls(data['primes'], ell=data.get('ell'), field=data.get('field'), max_primes=max_primes)

    def __repr__(self):
        return f"AlexanderModule(primes={self.primes}, ell={self.ell}, field={self.field!r})"


def create_alexander_module(primes: Iterable[int], **options) -> AlexanderModule:
    """Create an Alexander module from a prime set."""
    return AlexanderModule(primes, **options)
