"""
Signature Memory: Content-Addressable Store for Module Signatures
=================================================================

Design Principles:
1. Hash-keyed primary map, first writer wins (store is idempotent)
2. Secondary index prime -> hashes, append-only, insertion ordered
3. Full-scan similarity search over fingerprints
4. Export is a flat projection; import re-derives every signature

Export layout:
    {
      "entries": [{"hash", "primes", "fingerprint", "polynomial"}, ...],
      "metadata": {"created", "totalEntries"}
    }
"""

from __future__ import annotations

import gzip
import json
import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from .alexander import AlexanderModule
from .constants import DEFAULT_TOLERANCE, DEFAULT_TOP_K
from .errors import FingerprintMismatchError, InvalidInputError
from .signature import ModuleSignature

logger = logging.getLogger(__name__)

ModuleFactory = Callable[[List[int]], AlexanderModule]


# =============================================================================
# SECTION 1: Result Types
# =============================================================================

@dataclass(frozen=True)
class StoreResult:
    """Outcome of SignatureMemory.store; a duplicate is not an error."""
    stored: bool
    hash: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class SignatureMatch:
    """A stored signature returned by a search (distance only for nearest-neighbour)."""
    hash: int
    signature: ModuleSignature
    distance: Optional[float] = None


# =============================================================================
# SECTION 2: Memory Store
# =============================================================================

class SignatureMemory:
    """
    In-memory content-addressable store of module signatures.

    Thread-safe: mutation and iteration hold a re-entrant lock.
    """

    def __init__(self):
        self._signatures: Dict[int, ModuleSignature] = {}
        self._prime_index: Dict[int, List[int]] = {}
        self._lock = threading.RLock()
        self.metadata: Dict[str, Any] = {
            'created': time.time(),
            'total_entries': 0
        }

    def store(self, signature: ModuleSignature) -> StoreResult:
        """
        Store a signature under its hash.

        A hash already present is left untouched, including its prime
        index entries.
        """
        h = signature.hash
        with self._lock:
            if h in self._signatures:
                logger.debug("Signature %08x already stored", h)
                return StoreResult(stored=False, hash=h, reason='already exists')

            self._signatures[h] = signature
            for p in signature.primes:
                self._prime_index.setdefault(p, []).append(h)
            self.metadata['total_entries'] += 1

        return StoreResult(stored=True, hash=h)

    def get(self, hash_value: int) -> Optional[ModuleSignature]:
        return self._signatures.get(hash_value)

    def has(self, hash_value: int) -> bool:
        return hash_value in self._signatures

    def __contains__(self, hash_value: int) -> bool:
        return self.has(hash_value)

    def __len__(self) -> int:
        return len(self._signatures)

    @property
    def size(self) -> int:
        return len(self._signatures)

    def get_all(self) -> List[ModuleSignature]:
        with self._lock:
            return list(self._signatures.values())

    def find_by_prime(self, prime: int) -> List[ModuleSignature]:
        """Signatures whose prime set contains ``prime``, in insertion order."""
        with self._lock:
            hashes = list(self._prime_index.get(prime, []))
            return [self._signatures[h] for h in hashes if h in self._signatures]

    def find_closest(self, query: ModuleSignature, top_k: int = DEFAULT_TOP_K) -> List[SignatureMatch]:
        """
        Nearest stored signatures by fingerprint distance, ascending.

        Incompatible signatures (fingerprint length mismatch) are skipped.
        """
        with self._lock:
            candidates = list(self._signatures.items())

        results = []
        for h, sig in candidates:
            try:
                distance = query.distance_to(sig)
            except FingerprintMismatchError as e:
                logger.debug("Skipping %08x: %s", h, e)
                continue
            results.append(SignatureMatch(hash=h, signature=sig, distance=distance))

        results.sort(key=lambda m: m.distance)
        return results[:top_k]

    def find_equivalent(self, query: ModuleSignature,
                        tolerance: float = DEFAULT_TOLERANCE) -> List[SignatureMatch]:
        with self._lock:
            candidates = list(self._signatures.items())

        return [
            SignatureMatch(hash=h, signature=sig)
            for h, sig in candidates
            if query.is_equivalent_to(sig, tolerance)
        ]

    @property
    def stats(self) -> Dict[str, Any]:
        with self._lock:
            unique_primes = {p for sig in self._signatures.values() for p in sig.primes}
            return {
                'total_signatures': len(self._signatures),
                'unique_primes': len(unique_primes),
                'prime_index': len(self._prime_index),
                'created': self.metadata['created']
            }

    def clear(self):
        with self._lock:
            self._signatures.clear()
            self._prime_index.clear()
            self.metadata['total_entries'] = 0
        logger.info("Signature memory cleared")

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            entries = [
                {
                    'hash': h,
                    'primes': sig.primes,
                    'fingerprint': sig.fingerprint.tolist(),
                    'polynomial': sig.alexander_polynomial
                }
                for h, sig in self._signatures.items()
            ]
            return {
                'entries': entries,
                'metadata': {
                    'created': self.metadata['created'],
                    'totalEntries': self.metadata['total_entries']
                }
            }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], module_factory: ModuleFactory) -> 'SignatureMemory':
        """
        Rebuild a store from an export.

        Args:
            data: Output of ``to_dict``
            module_factory: primes -> AlexanderModule; each signature is
                re-derived from its primes, exported fingerprints are not
                trusted

        Raises:
            InvalidInputError: An entry has no ``primes``
        """
        memory = cls()
        for entry in data.get('entries', []):
            if 'primes' not in entry:
                raise InvalidInputError("Memory entry has no 'primes' field", {'entry': entry})
            memory.store(ModuleSignature(module_factory(entry['primes'])))
        return memory

    def save(self, path: Union[str, Path]) -> Path:
        """Write the export as JSON (gzip-compressed for a .gz path)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(self.to_dict())

        if path.suffix == '.gz':
            with gzip.open(path, 'wt', encoding='utf-8') as f:
                f.write(payload)
        else:
            path.write_text(payload, encoding='utf-8')

        logger.info("Saved %d signatures to %s", len(self), path)
        return path

    @classmethod
    def load(cls, path: Union[str, Path], module_factory: ModuleFactory) -> 'SignatureMemory':
        path = Path(path)
        if path.suffix == '.gz':
            with gzip.open(path, 'rt', encoding='utf-8') as f:
                data = json.load(f)
        else:
            data = json.loads(path.read_text(encoding='utf-8'))

        memory = cls.from_dict(data, module_factory)
        logger.info("Loaded %d signatures from %s", len(memory), path)
        return memory


def create_signature_memory(signatures: Optional[Iterable[ModuleSignature]] = None) -> SignatureMemory:
    """Create a signature memory, optionally pre-populated."""
    memory = SignatureMemory()
    for sig in signatures or []:
        memory.store(sig)
    return memory
