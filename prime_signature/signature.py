"""
Module Signature

Read-only view over an Alexander module's signature: the content
addressable key, the 12-sample fingerprint and a Euclidean metric on it.
"""

import time
from typing import Any, Dict, Iterable, List, Optional

import numpy as np

from .alexander import AlexanderModule, SignatureRecord
from .constants import DEFAULT_TOLERANCE
from .errors import FingerprintMismatchError


class ModuleSignature:
    """
    Content-addressable key derived from Alexander module invariants.

    Every field is derived from ``module.signature`` and fixed once read.
    """

    def __init__(self, module: AlexanderModule):
        self.module = module
        self._data: Optional[SignatureRecord] = None
        self._fingerprint: Optional[np.ndarray] = None

    @property
    def data(self) -> SignatureRecord:
        if self._data is None:
            self._data = self.module.signature
        return self._data

    @property
    def hash(self) -> int:
        return self.data.hash

    @property
    def primes(self) -> List[int]:
        return list(self.data.primes)

    @property
    def alexander_polynomial(self) -> str:
        return self.data.alexander_polynomial

    @property
    def fingerprint(self) -> np.ndarray:
        """Magnitudes of the characteristic values, in sample order."""
        if self._fingerprint is None:
            fp = np.array(self.data.fingerprint, dtype=np.float64)
            fp.setflags(write=False)
            self._fingerprint = fp
        return self._fingerprint

    def distance_to(self, other: 'ModuleSignature') -> float:
        """
        Euclidean distance between fingerprints.

        Raises:
            FingerprintMismatchError: Fingerprints differ in length, which
                only happens when signatures come from different schemas
        """
        fp1 = self.fingerprint
        fp2 = other.fingerprint
        if len(fp1) != len(fp2):
            raise FingerprintMismatchError(len(fp1), len(fp2))
        return float(np.linalg.norm(fp1 - fp2))

    def is_equivalent_to(self, other: 'ModuleSignature', tolerance: float = DEFAULT_TOLERANCE) -> bool:
        return AlexanderModule.equivalent_signatures(self.data, other.data, tolerance)

    def to_memory_entry(self) -> Dict[str, Any]:
        return {
            'key': self.hash,
            'primes': self.primes,
            'fingerprint': self.fingerprint.tolist(),
            'polynomial': self.alexander_polynomial,
            'created': time.time()
        }

    def __str__(self):
        return f"ModuleSignature[{','.join(str(p) for p in self.primes)}|{self.hash:x}]"

    def __repr__(self):
        return f"ModuleSignature(primes={self.primes}, hash={self.hash})"


def extract_signature(primes: Iterable[int], **options) -> ModuleSignature:
    """Build a fresh module and wrap its signature (no caching)."""
    return ModuleSignature(AlexanderModule(primes, **options))
