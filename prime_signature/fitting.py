"""
Fitting Ideal Module

The d-th Fitting ideal E_d(M) of a finitely presented module M is
generated by the (n-d) x (n-d) minors of a presentation matrix. Here an
ideal is approximated by a short list of generator polynomials; the
0-th ideal carries the Alexander polynomial.
"""

import math
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .constants import DEFAULT_ZERO_SAMPLES, TWO_PI, ZERO_THRESHOLD
from .numeric import fold_hash_sequence
from .polynomial import LaurentPolynomial, is_unit


class FittingIdeal:
    """
    Ideal E_d given by generator polynomials.

    Attributes:
        degree: The degree d of E_d
        generators: Generator polynomials, in construction order
    """

    def __init__(self, degree: int, generators: Optional[Sequence[LaurentPolynomial]] = None):
        self.degree = degree
        self.generators: List[LaurentPolynomial] = list(generators or [])

    @classmethod
    def principal(cls, degree: int, generator: LaurentPolynomial) -> 'FittingIdeal':
        return cls(degree, [generator])

    @classmethod
    def unit(cls, degree: int) -> 'FittingIdeal':
        """The whole ring, generated by 1."""
        return cls(degree, [LaurentPolynomial.constant(1)])

    @property
    def is_trivial(self) -> bool:
        """True if some generator is a unit (the ideal is the whole ring)."""
        return any(is_unit(g) for g in self.generators)

    @property
    def is_zero(self) -> bool:
        return all(g.is_zero for g in self.generators)

    @property
    def primary_generator(self) -> LaurentPolynomial:
        """
        Stand-in for the gcd of the generators.

        The single generator of a principal ideal, otherwise the first
        nonzero generator. No Laurent-ring gcd is computed.
        """
        if len(self.generators) == 1:
            return self.generators[0]
        for g in self.generators:
            if not g.is_zero:
                return g
        return LaurentPolynomial()

    @property
    def characteristic_polynomial(self) -> LaurentPolynomial:
        return self.primary_generator.normalize()

    def evaluate_on_circle(self, theta: float) -> Dict[str, Any]:
        """
        Evaluate every generator at t = e^(i*theta).

        Returns:
            Dictionary with per-generator ``values``, their minimum
            magnitude ``min_abs`` (distance to the zero locus) and ``theta``
        """
        values = [g.evaluate_on_circle(theta) for g in self.generators]
        return {
            'values': values,
            'min_abs': min((v.abs for v in values), default=math.inf),
            'theta': theta
        }

    def find_circle_zeros(self, samples: int = DEFAULT_ZERO_SAMPLES) -> List[float]:
        """
        Coarse zero sieve on the unit circle.

        Args:
            samples: Number of equally spaced angles scanned in [0, 2*pi)

        Returns:
            Angles where the smallest generator magnitude is below 0.1
        """
        thetas = (TWO_PI * np.arange(samples)) / samples
        return [
            float(theta) for theta in thetas
            if self.evaluate_on_circle(float(theta))['min_abs'] < ZERO_THRESHOLD
        ]

    @property
    def signature_hash(self) -> int:
        """
        Fold the characteristic polynomial's dense coefficients into a
        signed 32-bit integer (hash*31 + coeff, wrapping).
        """
        gen = self.characteristic_polynomial
        return fold_hash_sequence(gen.get(k) for k in range(gen.min_power, gen.max_power + 1))

    def summary(self) -> Dict[str, Any]:
        """Metadata recorded in a module signature."""
        return {
            'degree': self.degree,
            'isTrivial': self.is_trivial,
            'isZero': self.is_zero,
            'generatorDegree': self.characteristic_polynomial.degree
        }

    def __repr__(self):
        return f"FittingIdeal(degree={self.degree}, generators={len(self.generators)})"
