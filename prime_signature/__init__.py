"""
Prime Signature - Content-Addressable Signatures for Prime Sets

Derives a stable signature for a finite set of primes from the Fitting
ideals of its Alexander module, and stores signatures for exact,
per-prime and nearest-neighbour retrieval.
"""

import logging

__version__ = "0.1.0"

from .errors import SignatureError, InvalidInputError, FingerprintMismatchError, ResourceLimitError
from .config import SignatureConfig
from .polynomial import LaurentPolynomial, CircleValue, symmetrize
from .fitting import FittingIdeal
from .crowell import CrowellSequence, GroupData
from .alexander import AlexanderModule, CharacteristicValue, SignatureRecord, create_alexander_module
from .signature import ModuleSignature, extract_signature
from .memory import SignatureMemory, StoreResult, SignatureMatch, create_signature_memory
from .extractor import SignatureExtractor, canonical_key, create_signature_extractor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "SignatureError",
    "InvalidInputError",
    "FingerprintMismatchError",
    "ResourceLimitError",
    "SignatureConfig",
    "LaurentPolynomial",
    "CircleValue",
    "symmetrize",
    "FittingIdeal",
    "CrowellSequence",
    "GroupData",
    "AlexanderModule",
    "CharacteristicValue",
    "SignatureRecord",
    "create_alexander_module",
    "ModuleSignature",
    "extract_signature",
    "SignatureMemory",
    "StoreResult",
    "SignatureMatch",
    "create_signature_memory",
    "SignatureExtractor",
    "canonical_key",
    "create_signature_extractor",
]
