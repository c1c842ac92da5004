"""
Configuration for signature extraction.
"""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from .constants import DEFAULT_ELL, DEFAULT_FIELD, DEFAULT_MAX_PRIMES, DEFAULT_TOLERANCE, DEFAULT_TOP_K
from .errors import InvalidInputError


@dataclass(frozen=True)
class SignatureConfig:
    """
    Extraction parameters.

    ell and field are passed to every AlexanderModule; max_primes bounds
    the 2^r subset enumeration; tolerance and top_k are search defaults.
    """
    ell: int = DEFAULT_ELL
    field: str = DEFAULT_FIELD
    max_primes: int = DEFAULT_MAX_PRIMES
    tolerance: float = DEFAULT_TOLERANCE
    top_k: int = DEFAULT_TOP_K

    def __post_init__(self):
        """Validate configuration."""
        if self.ell < 2:
            raise InvalidInputError(f"ell must be >= 2, got {self.ell}")
        if self.max_primes < 1:
            raise InvalidInputError(f"max_primes must be >= 1, got {self.max_primes}")
        if self.tolerance < 0:
            raise InvalidInputError(f"tolerance must be >= 0, got {self.tolerance}")
        if self.top_k < 1:
            raise InvalidInputError(f"top_k must be >= 1, got {self.top_k}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SignatureConfig':
        """Create from a dict; unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'SignatureConfig':
        """Load from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text(encoding='utf-8')))
