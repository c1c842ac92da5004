"""
Laurent Polynomial Module

Sparse polynomials in Z[t, t^-1] (the group ring Z[Z]) used to represent
Alexander polynomials and Fitting ideal generators.
"""

import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .numeric import Number, round_half_up


@dataclass(frozen=True)
class CircleValue:
    """Value of a polynomial at t = e^(i*theta)."""
    re: float
    im: float
    abs: float


class LaurentPolynomial:
    """
    Laurent polynomial with sparse coefficients.

    Values are immutable: every operation returns a new polynomial and
    zero coefficients are never stored.

    Attributes:
        coeffs: Mapping power -> nonzero coefficient (read-only view)
    """

    __slots__ = ("_coeffs",)

    def __init__(self, coeffs: Union[Mapping[int, Number], Sequence[Number], None] = None):
        """
        Create a Laurent polynomial.

        Args:
            coeffs: Either a mapping {power: coeff}, e.g. {0: 1, 1: -1, 2: 1}
                for 1 - t + t^2, or a sequence [a0, a1, a2, ...] of
                coefficients for non-negative powers.
        """
        terms: Dict[int, Number] = {}
        if coeffs is None:
            pass
        elif isinstance(coeffs, Mapping):
            for power, value in coeffs.items():
                if value != 0:
                    terms[int(power)] = value
        else:
            for power, value in enumerate(coeffs):
                if value != 0:
                    terms[power] = value
        self._coeffs = terms

    @classmethod
    def _from_terms(cls, terms: Dict[int, Number]) -> 'LaurentPolynomial':
        poly = cls.__new__(cls)
        poly._coeffs = {k: v for k, v in terms.items() if v != 0}
        return poly

    # -------------------------------------------------------------------------
    # Coefficient Access
    # -------------------------------------------------------------------------

    @property
    def coeffs(self) -> Mapping[int, Number]:
        return dict(self._coeffs)

    def get(self, power: int) -> Number:
        """Coefficient at ``power`` (0 if absent)."""
        return self._coeffs.get(power, 0)

    def set(self, power: int, value: Number) -> 'LaurentPolynomial':
        """Copy with the coefficient at ``power`` replaced (dropped if 0)."""
        terms = dict(self._coeffs)
        terms[power] = value
        return self._from_terms(terms)

    def terms(self) -> List[Tuple[int, Number]]:
        """(power, coeff) pairs sorted by power."""
        return sorted(self._coeffs.items())

    @property
    def min_power(self) -> int:
        if not self._coeffs:
            return 0
        return min(self._coeffs)

    @property
    def max_power(self) -> int:
        if not self._coeffs:
            return 0
        return max(self._coeffs)

    @property
    def degree(self) -> int:
        """Span max_power - min_power."""
        return self.max_power - self.min_power

    @property
    def is_zero(self) -> bool:
        return not self._coeffs

    def __len__(self) -> int:
        return len(self._coeffs)

    # -------------------------------------------------------------------------
    # Ring Operations
    # -------------------------------------------------------------------------

    def add(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        terms = dict(self._coeffs)
        for k, v in other._coeffs.items():
            terms[k] = terms.get(k, 0) + v
        return self._from_terms(terms)

    def subtract(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        terms = dict(self._coeffs)
        for k, v in other._coeffs.items():
            terms[k] = terms.get(k, 0) - v
        return self._from_terms(terms)

    def multiply(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        """Convolution over all pairs of terms."""
        terms: Dict[int, Number] = {}
        for k1, v1 in self._coeffs.items():
            for k2, v2 in other._coeffs.items():
                terms[k1 + k2] = terms.get(k1 + k2, 0) + v1 * v2
        return self._from_terms(terms)

    def scale(self, scalar: Number) -> 'LaurentPolynomial':
        return self._from_terms({k: scalar * v for k, v in self._coeffs.items()})

    def __add__(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        return self.add(other)

    def __sub__(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        return self.subtract(other)

    def __mul__(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        return self.multiply(other)

    def __neg__(self) -> 'LaurentPolynomial':
        return self.scale(-1)

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def evaluate(self, value: float) -> float:
        """Evaluate at t = value by direct summation (negative powers of 0 give inf)."""
        result = 0.0
        for k, v in self.terms():
            if value == 0 and k < 0:
                result += math.copysign(math.inf, v)
            else:
                result += v * math.pow(value, k)
        return result

    def evaluate_on_circle(self, theta: float) -> CircleValue:
        """
        Evaluate at t = e^(i*theta).

        Sums coeff*cos(k*theta) and coeff*sin(k*theta) in ascending power
        order, so equal polynomials give bit-identical samples.
        """
        re = 0.0
        im = 0.0
        for k, v in self.terms():
            re += v * math.cos(k * theta)
            im += v * math.sin(k * theta)
        return CircleValue(re=re, im=im, abs=math.sqrt(re * re + im * im))

    # -------------------------------------------------------------------------
    # Canonical Forms
    # -------------------------------------------------------------------------

    def normalize(self) -> 'LaurentPolynomial':
        """
        Shift to min power 0 and divide by the leading coefficient.

        The result is a comparison form and may have fractional
        coefficients; exact integer quotients stay integers.
        """
        if self.is_zero:
            return LaurentPolynomial()

        shift = self.min_power
        lead = self.get(self.max_power)
        terms = {}
        for k, v in self._coeffs.items():
            if isinstance(v, int) and isinstance(lead, int) and v % lead == 0:
                terms[k - shift] = v // lead
            else:
                terms[k - shift] = v / lead
        return self._from_terms(terms)

    def clone(self) -> 'LaurentPolynomial':
        return self._from_terms(self._coeffs)

    @classmethod
    def from_roots(cls, roots: Iterable[Number]) -> 'LaurentPolynomial':
        """Build (t - r1)(t - r2)... by repeated multiplication."""
        result = cls({0: 1})
        for r in roots:
            result = result.multiply(cls({0: -r, 1: 1}))
        return result

    @classmethod
    def augmentation_generator(cls) -> 'LaurentPolynomial':
        """The augmentation ideal generator t - 1."""
        return cls({0: -1, 1: 1})

    @classmethod
    def constant(cls, value: Number = 1) -> 'LaurentPolynomial':
        return cls({0: value})

    # -------------------------------------------------------------------------
    # Value Semantics
    # -------------------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, LaurentPolynomial):
            return NotImplemented
        return self._coeffs == other._coeffs

    def __hash__(self):
        return hash(frozenset(self._coeffs.items()))

    def __repr__(self):
        return f"LaurentPolynomial({dict(self.terms())})"

    def __str__(self):
        if self.is_zero:
            return "0"

        parts = []
        for k, c in self.terms():
            coeff = _format_coefficient(c)
            if k == 0:
                parts.append(coeff)
                continue
            base = "t" if k == 1 else f"t^({k})" if k < 0 else f"t^{k}"
            if c == 1:
                parts.append(base)
            elif c == -1:
                parts.append(f"-{base}")
            else:
                parts.append(f"{coeff}{base}")

        return " + ".join(parts).replace("+ -", "- ")


def _format_coefficient(c: Number) -> str:
    if isinstance(c, float) and c.is_integer():
        return str(int(c))
    return str(c)


def symmetrize(poly: LaurentPolynomial) -> LaurentPolynomial:
    """
    Force a palindromic coefficient sequence.

    Each coefficient between min_power and max_power becomes the average
    of itself and its mirror (max + min - k), rounded half up.
    """
    if poly.is_zero:
        return poly

    low = poly.min_power
    high = poly.max_power
    terms = {}
    for k in range(low, high + 1):
        terms[k] = round_half_up((poly.get(k) + poly.get(high + low - k)) / 2)
    return LaurentPolynomial(terms)


def is_unit(poly: Optional[LaurentPolynomial]) -> bool:
    """True for a single-term +-1 monomial, i.e. a unit of Z[t, t^-1]."""
    if poly is None or len(poly) != 1:
        return False
    (value,) = poly.coeffs.values()
    return abs(value) == 1
