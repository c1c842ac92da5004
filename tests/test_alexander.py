"""
Tests for the Alexander module
"""

import math

import pytest
import numpy as np

from prime_signature import (
    AlexanderModule,
    CrowellSequence,
    FittingIdeal,
    InvalidInputError,
    LaurentPolynomial,
    ResourceLimitError,
    create_alexander_module,
)
from prime_signature.alexander import compute_signature_hash

FIRST_PRIMES = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71, 73, 79, 83, 89, 97]


class TestConstruction:
    def test_create_from_prime_set(self):
        module = AlexanderModule([5, 7, 11])
        assert module.r == 3
        assert module.ell == 2
        assert module.field == "Q"

    def test_filters_non_primes(self):
        module = AlexanderModule([4, 5, 6, 7])
        assert module.primes == [5, 7]
        assert module.r == 2

    def test_sorts_and_deduplicates(self):
        module = AlexanderModule([13, 5, 7, 5, 11, 13])
        assert module.primes == [5, 7, 11, 13]

    def test_options(self):
        module = AlexanderModule([5, 7], ell=3, field="Q(i)")
        assert module.ell == 3
        assert module.field == "Q(i)"

    def test_empty_prime_set_raises(self):
        with pytest.raises(InvalidInputError):
            AlexanderModule([])

    def test_only_non_primes_raises(self):
        with pytest.raises(InvalidInputError):
            AlexanderModule([1, 4, 9])

    def test_invalid_ell_raises(self):
        with pytest.raises(InvalidInputError):
            AlexanderModule([5, 7], ell=1)

    def test_resource_limit(self):
        with pytest.raises(ResourceLimitError) as excinfo:
            AlexanderModule(FIRST_PRIMES[:5], max_primes=4)
        assert excinfo.value.count == 5
        assert excinfo.value.limit == 4

    def test_default_limit_rejects_25_primes(self):
        with pytest.raises(ResourceLimitError):
            AlexanderModule(FIRST_PRIMES)

    def test_metadata(self):
        module = AlexanderModule([3, 5, 7])
        assert module.metadata['prime_product'] == 105
        assert module.metadata['prime_sum'] == 15

    def test_factory(self):
        module = create_alexander_module([7, 5], ell=5)
        assert module.primes == [5, 7]
        assert module.ell == 5


class TestCrowell:
    def test_has_crowell_sequence(self):
        module = AlexanderModule([5, 7, 11])
        seq = module.crowell_sequence
        assert isinstance(seq, CrowellSequence)
        assert seq is module.crowell_sequence
        assert seq.H.rank == 3


class TestFittingIdeals:
    def test_scenario_four_primes(self):
        module = AlexanderModule([5, 7, 11, 13], ell=2)
        assert module.r == 4
        assert module.compute_fitting_ideal(0).degree == 0
        assert set(module.get_all_fitting_ideals(3).keys()) == {0, 1, 2, 3}

    def test_memoized(self):
        module = AlexanderModule([5, 7, 11])
        assert module.compute_fitting_ideal(1) is module.compute_fitting_ideal(1)
        assert module.get_all_fitting_ideals(2)[0] is module.compute_fitting_ideal(0)

    @pytest.mark.parametrize("r", range(1, 7))
    def test_top_degree_is_trivial(self, r):
        module = AlexanderModule(FIRST_PRIMES[:r])
        assert module.compute_fitting_ideal(r).is_trivial
        assert module.compute_fitting_ideal(r + 2).is_trivial

    def test_minor_generators(self):
        # E_1 of 3 primes: one (1 - t)^2 minor per 2-subset
        module = AlexanderModule([5, 7, 11])
        ideal = module.compute_fitting_ideal(1)
        assert len(ideal.generators) == 3
        assert all(g == LaurentPolynomial({0: 1, 1: -2, 2: 1}) for g in ideal.generators)

    def test_minor_generators_size_one(self):
        module = AlexanderModule([5, 7, 11, 13])
        ideal = module.compute_fitting_ideal(3)
        assert len(ideal.generators) == 4
        assert ideal.generators[0] == LaurentPolynomial({0: 1, 1: -1})

    def test_negative_degree_raises(self):
        with pytest.raises(InvalidInputError):
            AlexanderModule([5, 7]).compute_fitting_ideal(-1)


class TestAlexanderPolynomial:
    def test_single_prime_is_one(self):
        assert AlexanderModule([5]).alexander_polynomial == LaurentPolynomial({0: 1})

    def test_two_primes(self):
        # no pairs inside singletons: 1 + 2t + t^2 for any two primes
        assert str(AlexanderModule([3, 5]).alexander_polynomial) == "1 + 2t + t^2"
        assert str(AlexanderModule([97, 2]).alexander_polynomial) == "1 + 2t + t^2"

    def test_three_primes(self):
        # (3|5) = (3|7) = (5|7) = -1 -> [1, 3, -3, 1] -> symmetrized 1 + t^3
        assert str(AlexanderModule([3, 5, 7]).alexander_polynomial) == "1 + t^3"

    def test_four_primes(self):
        # [1, 4, -4, 0, 1] symmetrized to 1 + 2t - 4t^2 + 2t^3 + t^4
        poly = AlexanderModule([5, 7, 11, 13]).alexander_polynomial
        assert poly == LaurentPolynomial({0: 1, 1: 2, 2: -4, 3: 2, 4: 1})
        assert str(poly) == "1 + 2t - 4t^2 + 2t^3 + t^4"

    @pytest.mark.parametrize("r", range(2, 9))
    def test_palindromic(self, r):
        poly = AlexanderModule(FIRST_PRIMES[1:r + 1]).alexander_polynomial
        for k in range(poly.min_power, poly.max_power + 1):
            assert poly.get(k) == poly.get(poly.max_power + poly.min_power - k)

    def test_matches_direct_subset_enumeration(self):
        from itertools import combinations
        from prime_signature.numeric import legendre_symbol

        primes = [3, 7, 11, 19, 23, 31]
        module = AlexanderModule(primes)
        sums = module._subset_sign_sums()
        for i in range(1, len(primes)):
            expected = 0
            for combo in combinations(primes, i):
                sign = 1
                for a, b in combinations(combo, 2):
                    sign *= legendre_symbol(a, b)
                expected += sign
            assert sums[i] == expected


class TestSignature:
    def test_structure(self):
        sig = AlexanderModule([5, 7, 11]).signature
        assert sig.primes == (5, 7, 11)
        assert sig.ell == 2
        assert sig.field == "Q"
        assert set(sig.fitting_degrees) == {0, 1, 2, 3}
        assert len(sig.characteristic_values) == 12
        assert [cv.k for cv in sig.characteristic_values] == list(range(12))
        assert sig.characteristic_values[3].theta == pytest.approx(math.pi / 2)
        assert 0 <= sig.hash <= 0xFFFFFFFF

    def test_computed_once(self):
        module = AlexanderModule([5, 7])
        assert module.signature is module.signature

    def test_fitting_degree_metadata(self):
        sig = AlexanderModule([5, 7]).signature
        assert sig.fitting_degrees[2] == {
            'degree': 2, 'isTrivial': True, 'isZero': False, 'generatorDegree': 0
        }
        assert sig.fitting_degrees[1]['generatorDegree'] == 1

    def test_exact_hash_single_prime(self):
        # 5, then twelve samples of |1| = 1000
        assert AlexanderModule([5]).signature.hash == 206130821

    def test_exact_hash_two_primes(self):
        assert AlexanderModule([3, 5]).signature.hash == 1751807330

    def test_exact_hash_three_primes(self):
        assert AlexanderModule([3, 5, 7]).signature.hash == 2178570649

    def test_exact_hash_four_primes(self):
        sig = AlexanderModule([5, 7, 11, 13]).signature
        np.testing.assert_allclose(
            sig.fingerprint,
            [2, 0.4641016, 3, 6, 7, 6.4641016, 6, 6.4641016, 7, 6, 3, 0.4641016],
            atol=1e-6
        )
        assert sig.hash == 44075812

    def test_hash_order_independent(self):
        a = AlexanderModule([5, 7, 11, 13]).signature.hash
        b = AlexanderModule([13, 7, 5, 11]).signature.hash
        assert a == b

    def test_hash_depends_on_primes(self):
        # same polynomial, different primes
        assert AlexanderModule([3, 5]).signature.hash != AlexanderModule([7, 11]).signature.hash

    def test_compute_signature_hash_helper(self):
        sig = AlexanderModule([3, 5, 7]).signature
        assert compute_signature_hash(sig.primes, sig.characteristic_values) == sig.hash

    def test_to_dict(self):
        data = AlexanderModule([3, 5, 7]).signature.to_dict()
        assert data['alexanderPolynomial'] == "1 + t^3"
        assert len(data['characteristicValues']) == 12
        assert set(data['characteristicValues'][0]) == {'k', 'theta', 'abs', 're', 'im'}
        assert data['fittingDegrees'][0]['degree'] == 0


class TestEquivalence:
    def test_same_set_equivalent(self):
        a = AlexanderModule([5, 7, 11]).signature
        b = AlexanderModule([11, 5, 7]).signature
        assert AlexanderModule.equivalent_signatures(a, b)

    def test_same_polynomial_equivalent(self):
        a = AlexanderModule([3, 5]).signature
        b = AlexanderModule([7, 11]).signature
        assert AlexanderModule.equivalent_signatures(a, b)

    def test_cardinality_differs(self):
        a = AlexanderModule([5]).signature
        b = AlexanderModule([5, 7]).signature
        assert not AlexanderModule.equivalent_signatures(a, b, tolerance=100)

    def test_ell_differs(self):
        a = AlexanderModule([5, 7], ell=2).signature
        b = AlexanderModule([5, 7], ell=3).signature
        assert not AlexanderModule.equivalent_signatures(a, b)

    def test_tolerance(self):
        a = AlexanderModule([3, 5, 7]).signature
        b = AlexanderModule([5, 7, 11]).signature
        assert AlexanderModule.equivalent_signatures(a, b, tolerance=10)


class TestStatsAndSerialization:
    def test_stats(self):
        stats = AlexanderModule([3, 5]).stats
        assert stats['num_primes'] == 2
        assert stats['ell'] == 2
        assert stats['alexander_degree'] == 2
        # mean of 2 + 2cos(theta) over the twelve roots of unity
        assert stats['mean_characteristic_value'] == pytest.approx(2.0)

    def test_round_trip(self):
        module = AlexanderModule([5, 7, 11], ell=3)
        data = module.to_dict()
        assert data['primes'] == [5, 7, 11]
        assert data['metadata']['primeProduct'] == 385

        restored = AlexanderModule.from_dict(data)
        assert restored.primes == module.primes
        assert restored.ell == 3
        assert restored.signature.hash == module.signature.hash

    def test_from_dict_recomputes(self):
        data = AlexanderModule([5, 7]).to_dict()
        data['signature']['hash'] = 12345
        data['alexanderPolynomial'] = "bogus"
        restored = AlexanderModule.from_dict(data)
        assert restored.signature.hash == AlexanderModule([5, 7]).signature.hash

    def test_from_dict_missing_primes(self):
        with pytest.raises(InvalidInputError):
            AlexanderModule.from_dict({'ell': 2})


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
