"""
Tests for Laurent polynomials
"""

import math

import pytest
import numpy as np

from prime_signature.polynomial import LaurentPolynomial, symmetrize, is_unit


def random_polynomial(rng, max_terms=5):
    n_terms = int(rng.integers(0, max_terms + 1))
    powers = rng.integers(-4, 5, size=n_terms)
    values = rng.integers(-6, 7, size=n_terms)
    return LaurentPolynomial({int(p): int(v) for p, v in zip(powers, values)})


class TestConstruction:
    def test_create_from_mapping(self):
        poly = LaurentPolynomial({0: 1, 1: -2, 2: 1})
        assert poly.get(0) == 1
        assert poly.get(1) == -2
        assert poly.get(2) == 1

    def test_create_from_sequence(self):
        poly = LaurentPolynomial([1, 0, -2, 1])
        assert poly.get(0) == 1
        assert poly.get(2) == -2
        assert 1 not in poly.coeffs

    def test_empty_is_zero(self):
        assert LaurentPolynomial().is_zero
        assert LaurentPolynomial({3: 0}).is_zero

    def test_negative_powers(self):
        poly = LaurentPolynomial({-1: 2, 0: 1, 1: 3})
        assert poly.get(-1) == 2
        assert poly.get(5) == 0

    def test_zero_entries_never_stored(self):
        poly = LaurentPolynomial({0: 1, 1: 1})
        assert 1 not in poly.set(1, 0).coeffs
        assert 1 not in poly.subtract(LaurentPolynomial({1: 1})).coeffs

    def test_set_returns_new_polynomial(self):
        poly = LaurentPolynomial({0: 1})
        changed = poly.set(2, 5)
        assert changed.get(2) == 5
        assert poly.get(2) == 0


class TestProperties:
    def test_powers_and_degree(self):
        poly = LaurentPolynomial({-2: 1, 0: 1, 3: 1})
        assert poly.min_power == -2
        assert poly.max_power == 3
        assert poly.degree == 5

    def test_zero_polynomial_powers(self):
        zero = LaurentPolynomial()
        assert zero.min_power == 0
        assert zero.max_power == 0
        assert zero.degree == 0


class TestArithmetic:
    def test_add(self):
        total = LaurentPolynomial({0: 1, 1: 2}).add(LaurentPolynomial({0: 3, 2: 1}))
        assert total == LaurentPolynomial({0: 4, 1: 2, 2: 1})

    def test_subtract(self):
        diff = LaurentPolynomial({0: 5, 1: 3}) - LaurentPolynomial({0: 2, 1: 1})
        assert diff == LaurentPolynomial({0: 3, 1: 2})

    def test_multiply(self):
        # (1 + t)(1 - t) = 1 - t^2
        prod = LaurentPolynomial({0: 1, 1: 1}) * LaurentPolynomial({0: 1, 1: -1})
        assert prod == LaurentPolynomial({0: 1, 2: -1})
        assert 1 not in prod.coeffs

    def test_multiply_negative_powers(self):
        prod = LaurentPolynomial({-1: 1}).multiply(LaurentPolynomial({1: 1, 2: 3}))
        assert prod == LaurentPolynomial({0: 1, 1: 3})

    def test_scale(self):
        assert LaurentPolynomial({0: 2, 1: 3}).scale(4) == LaurentPolynomial({0: 8, 1: 12})
        assert LaurentPolynomial({0: 2}).scale(0).is_zero

    def test_operands_not_mutated(self):
        p = LaurentPolynomial({0: 1, 1: 1})
        q = LaurentPolynomial({1: -1})
        p.add(q)
        p.multiply(q)
        q.scale(3)
        assert p == LaurentPolynomial({0: 1, 1: 1})
        assert q == LaurentPolynomial({1: -1})

    @pytest.mark.parametrize("seed", range(20))
    def test_ring_laws(self, seed):
        rng = np.random.default_rng(seed)
        p, q, r = (random_polynomial(rng) for _ in range(3))
        one = LaurentPolynomial({0: 1})

        assert p.add(q) == q.add(p)
        assert p.multiply(q.add(r)) == p.multiply(q).add(p.multiply(r))
        assert p.multiply(one) == p
        assert p.subtract(p).is_zero


class TestEvaluation:
    def test_evaluate(self):
        # 1 + 2t + t^2 at t = 3
        assert LaurentPolynomial({0: 1, 1: 2, 2: 1}).evaluate(3) == 16

    def test_evaluate_negative_power(self):
        assert LaurentPolynomial({-1: 4}).evaluate(2) == 2

    def test_evaluate_on_circle(self):
        # t at e^(i*pi/2) = i
        value = LaurentPolynomial({1: 1}).evaluate_on_circle(math.pi / 2)
        assert abs(value.re) < 1e-4
        assert abs(value.im - 1) < 1e-4
        assert abs(value.abs - 1) < 1e-12

    def test_augmentation_vanishes_at_one(self):
        value = LaurentPolynomial.augmentation_generator().evaluate_on_circle(0.0)
        assert value.abs == 0.0


class TestNormalization:
    def test_normalize_shifts_and_scales(self):
        normalized = LaurentPolynomial({1: 2, 2: 4}).normalize()
        assert normalized.min_power == 0
        assert normalized.get(1) == 1
        assert normalized.get(0) == 0.5

    def test_exact_division_keeps_integers(self):
        normalized = LaurentPolynomial({-1: 2, 0: 4, 1: 2}).normalize()
        assert normalized == LaurentPolynomial({0: 1, 1: 2, 2: 1})
        assert all(isinstance(v, int) for v in normalized.coeffs.values())

    def test_normalize_zero(self):
        assert LaurentPolynomial().normalize().is_zero

    @pytest.mark.parametrize("seed", range(10))
    def test_normalized_min_power_is_zero(self, seed):
        rng = np.random.default_rng(100 + seed)
        p = random_polynomial(rng)
        if not p.is_zero:
            assert p.normalize().min_power == 0
            assert p.normalize().get(p.degree) == 1


class TestStringForm:
    def test_simple(self):
        assert str(LaurentPolynomial({0: 1, 1: -1, 2: 1})) == "1 - t + t^2"

    def test_coefficients_and_negative_powers(self):
        poly = LaurentPolynomial({-2: -1, 0: 3, 1: 2, 3: -4})
        assert str(poly) == "-t^(-2) + 3 + 2t - 4t^3"

    def test_zero(self):
        assert str(LaurentPolynomial()) == "0"

    def test_integral_floats(self):
        assert str(LaurentPolynomial({0: 1.0, 1: 0.5})) == "1 + 0.5t"


class TestConstructors:
    def test_from_roots(self):
        # (t - 1)(t - 2) = t^2 - 3t + 2
        assert LaurentPolynomial.from_roots([1, 2]) == LaurentPolynomial({0: 2, 1: -3, 2: 1})

    def test_augmentation_generator(self):
        aug = LaurentPolynomial.augmentation_generator()
        assert aug.get(0) == -1
        assert aug.get(1) == 1

    def test_constant_default_is_unit(self):
        one = LaurentPolynomial.constant()
        assert one == LaurentPolynomial({0: 1})
        assert is_unit(one)

    def test_unit_detection(self):
        assert is_unit(LaurentPolynomial({0: 1}))
        assert is_unit(LaurentPolynomial({3: -1}))
        assert not is_unit(LaurentPolynomial({0: 2}))
        assert not is_unit(LaurentPolynomial({0: 1, 1: 1}))


class TestSymmetrize:
    def test_palindrome_unchanged(self):
        poly = LaurentPolynomial({0: 1, 1: 2, 2: 1})
        assert symmetrize(poly) == poly

    def test_rounds_half_up(self):
        # mirrored averages: 1.5, 0.5, 0.5, 1.5
        poly = LaurentPolynomial({0: 2, 1: 1, 3: 1})
        assert symmetrize(poly) == LaurentPolynomial({0: 2, 1: 1, 2: 1, 3: 2})

    def test_zero(self):
        assert symmetrize(LaurentPolynomial()).is_zero


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
