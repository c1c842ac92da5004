"""
Crowell Exact Sequence Module

Descriptive wrapper for the exact sequence of Z[H]-modules

    0 -> N^ab -> A_psi -> I_{Z[H]} -> 0

built from the synthetic group data of a prime set. No exactness or
splitting is computed; the accessors only report the fixed model.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .fitting import FittingIdeal
from .polynomial import LaurentPolynomial


@dataclass(frozen=True)
class GroupGenerator:
    """Generator sigma_p of the restricted-ramification group."""
    index: int
    prime: int

    @property
    def symbol(self) -> str:
        return f"σ_{self.prime}"


@dataclass
class GroupPresentation:
    """Generators and relations of a group (relations are words)."""
    generators: List[Any] = field(default_factory=list)
    relations: List[Any] = field(default_factory=list)
    rank: int = 0
    is_abelian: bool = False


@dataclass
class GroupData:
    """
    Synthetic group-theoretic data of a prime set.

    Attributes:
        G: Restricted-ramification group, one generator per prime
        H: Maximal abelian quotient, free abelian of rank r
        N: Kernel of psi: G -> H, left empty
    """
    G: GroupPresentation
    H: GroupPresentation
    N: GroupPresentation

    @classmethod
    def from_primes(cls, primes: List[int]) -> 'GroupData':
        generators = [GroupGenerator(index=i, prime=p) for i, p in enumerate(primes)]
        return cls(
            G=GroupPresentation(generators=generators, rank=len(generators)),
            H=GroupPresentation(generators=list(generators), rank=len(generators), is_abelian=True),
            N=GroupPresentation()
        )


class CrowellSequence:
    """
    Crowell exact sequence of a prime set.

    N^ab is the psi-Galois module, A_psi the presentation-level Alexander
    module and I_{Z[H]} the augmentation ideal.
    """

    def __init__(self, group_data: GroupData):
        self.G = group_data.G
        self.H = group_data.H
        self.N = group_data.N

        self._nab: Optional[Dict[str, Any]] = None
        self._apsi: Optional[Dict[str, Any]] = None
        self._aug_ideal: Optional[FittingIdeal] = None

    @property
    def nabelian_module(self) -> Dict[str, Any]:
        """N^ab: generator/relation counts passed through from N."""
        if self._nab is None:
            self._nab = {
                'generators': list(self.N.generators),
                'relations': list(self.N.relations),
                'rank': self.N.rank
            }
        return self._nab

    @property
    def crowell_alexander_module(self) -> Dict[str, Any]:
        """
        A_psi as a presentation-matrix record.

        Not the top-level AlexanderModule: a relations x generators matrix
        of constant polynomials standing in for Fox derivatives.
        """
        if self._apsi is None:
            matrix = [
                [LaurentPolynomial.constant(1) for _ in self.G.generators]
                for _ in self.G.relations
            ]
            self._apsi = {
                'presentation_matrix': matrix,
                'rank': len(self.G.relations)
            }
        return self._apsi

    @property
    def augmentation_ideal(self) -> FittingIdeal:
        """For H = Z the augmentation ideal is principal, generated by t - 1."""
        if self._aug_ideal is None:
            self._aug_ideal = FittingIdeal.principal(0, LaurentPolynomial.augmentation_generator())
        return self._aug_ideal

    def verify_exactness(self) -> Dict[str, bool]:
        """
        Report exactness at each position.

        Stub: always all-true. The model does not check injectivity of
        N^ab -> A_psi, exactness at A_psi or surjectivity onto I_{Z[H]}.
        """
        return {
            'injective_at_nab': True,
            'exact_at_apsi': True,
            'surjective_onto_aug_ideal': True
        }

    def get_splitting(self) -> Dict[str, Any]:
        """Splitting A_psi = N^ab (+) Lambda with E_d(N^ab) = E_{d+1}(A_psi)."""
        return {
            'direct_sum': True,
            'components': ['N^ab', 'Λ̂'],
            'fitting_shift': 1
        }
