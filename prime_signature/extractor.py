"""
Signature Extractor

Memoizing facade over AlexanderModule construction. Prime lists are
canonicalized into a cache key, and each key is computed at most once per
extractor, also under concurrent misses.
"""

import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .alexander import AlexanderModule
from .config import SignatureConfig
from .memory import SignatureMatch, SignatureMemory
from .signature import ModuleSignature

logger = logging.getLogger(__name__)


def canonical_key(primes: Iterable[int]) -> str:
    """Sorted, comma-joined form of a prime list."""
    return ",".join(str(p) for p in sorted(primes))


class SignatureExtractor:
    """
    Extracts module signatures from prime sets.

    Attributes:
        config: Extraction parameters
        memory: Backing SignatureMemory (owned unless injected)
    """

    def __init__(self,
                 config: Optional[SignatureConfig] = None,
                 memory: Optional[SignatureMemory] = None):
        self.config = config or SignatureConfig()
        self.memory = memory if memory is not None else SignatureMemory()
        self._cache: Dict[str, ModuleSignature] = {}
        self._key_locks: Dict[str, threading.Lock] = {}
        self._lock = threading.Lock()

    @property
    def ell(self) -> int:
        return self.config.ell

    def extract(self,
                primes: Sequence[int],
                store: bool = True,
                ell: Optional[int] = None,
                field: Optional[str] = None) -> ModuleSignature:
        """
        Extract the signature of a prime set.

        A cached signature is returned by reference and is not stored again;
        ``ell``/``field`` only apply when the key is computed for the first
        time.

        Args:
            primes: Prime set, any order
            store: Persist a newly computed signature into ``memory``
            ell: Override the configured base prime
            field: Override the configured field tag

        Raises:
            InvalidInputError: No primes in the input
            ResourceLimitError: Too many distinct primes
        """
        primes = list(primes)
        key = canonical_key(primes)

        with self._lock:
            signature = self._cache.get(key)
            if signature is not None:
                logger.debug("Extractor hit for [%s]", key)
                return signature
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        with key_lock:
            with self._lock:
                signature = self._cache.get(key)
            if signature is not None:
                return signature

            logger.debug("Extractor miss for [%s]", key)
            try:
                signature = self._compute(primes, ell, field)
                with self._lock:
                    self._cache[key] = signature
            finally:
                with self._lock:
                    self._key_locks.pop(key, None)

        if store:
            self.memory.store(signature)
        return signature

    def _compute(self, primes: Sequence[int], ell: Optional[int], field: Optional[str]) -> ModuleSignature:
        module = AlexanderModule(
            primes,
            ell=ell or self.config.ell,
            field=field or self.config.field,
            max_primes=self.config.max_primes
        )
        signature = ModuleSignature(module)
        # Force the signature so concurrent readers share a computed record
        signature.data
        return signature

    def extract_batch(self, prime_sets: Iterable[Sequence[int]], store: bool = True) -> List[ModuleSignature]:
        return [self.extract(primes, store=store) for primes in prime_sets]

    def find_resonant(self, primes: Sequence[int], top_k: Optional[int] = None) -> List[SignatureMatch]:
        """Closest stored signatures to ``primes``; the query itself is not stored."""
        query = self.extract(primes, store=False)
        return self.memory.find_closest(query, self.config.top_k if top_k is None else top_k)

    def find_equivalent(self, primes: Sequence[int], tolerance: Optional[float] = None) -> List[SignatureMatch]:
        """Stored signatures equivalent to ``primes`` within the configured tolerance."""
        query = self.extract(primes, store=False)
        return self.memory.find_equivalent(
            query, self.config.tolerance if tolerance is None else tolerance
        )

    def get_alignment_target(self, primes: Sequence[int]) -> Optional[ModuleSignature]:
        """The single closest stored signature, or None for an empty memory."""
        matches = self.find_resonant(primes, 1)
        return matches[0].signature if matches else None

    def clear_cache(self):
        """Drop cached signatures; the memory is left as is."""
        with self._lock:
            self._cache.clear()
        logger.info("Extractor cache cleared")

    @property
    def stats(self) -> Dict[str, Any]:
        return {
            'cache_size': len(self._cache),
            'memory_stats': self.memory.stats,
            'ell': self.config.ell
        }


def create_signature_extractor(config: Optional[SignatureConfig] = None,
                               memory: Optional[SignatureMemory] = None,
                               **options) -> SignatureExtractor:
    """Create an extractor; keyword options build a SignatureConfig."""
    if config is None and options:
        config = SignatureConfig(**options)
    return SignatureExtractor(config=config, memory=memory)
