"""
Demonstration of Prime-Set Signatures

This script walks through the full pipeline:
1. Alexander module and Fitting ideals of a prime set
2. Signature extraction and fingerprint comparison
3. Signature memory: storage, prime lookup and resonance search
"""

import logging
import tempfile
from pathlib import Path

from prime_signature import (
    AlexanderModule,
    SignatureConfig,
    SignatureExtractor,
    SignatureMemory,
    create_alexander_module,
)


def print_section(title):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demonstrate_alexander_module():
    """Show Fitting ideals and the Alexander polynomial."""
    print_section("STEP 1: Alexander Module of a Prime Set")

    module = AlexanderModule([5, 7, 11, 13], ell=2)
    print(f"\nPrimes: {module.primes}  (r = {module.r}, ell = {module.ell})")
    print(f"Alexander polynomial: {module.alexander_polynomial}")

    print("\n  Fitting ideals:")
    for degree, ideal in module.get_all_fitting_ideals(4).items():
        summary = ideal.summary()
        print(f"    E_{degree}: {len(ideal.generators)} generator(s), "
              f"trivial={summary['isTrivial']}, "
              f"generator degree={summary['generatorDegree']}")

    exactness = module.crowell_sequence.verify_exactness()
    print(f"\n  Crowell sequence exactness: {all(exactness.values())}")


def demonstrate_signatures(extractor):
    """Extract signatures and compare fingerprints."""
    print_section("STEP 2: Signature Extraction")

    prime_sets = [[3, 5, 7], [5, 7, 11], [5, 7, 11, 13], [7, 11, 13, 17]]
    signatures = extractor.extract_batch(prime_sets)

    for sig in signatures:
        print(f"\n{sig}")
        print(f"  polynomial:  {sig.alexander_polynomial}")
        print(f"  fingerprint: {[round(v, 3) for v in sig.fingerprint[:4]]} ...")

    a, b = signatures[2], signatures[3]
    print(f"\nDistance {a.primes} -> {b.primes}: {a.distance_to(b):.4f}")
    print(f"Equivalent: {a.is_equivalent_to(b)}")

    cached = extractor.extract([13, 11, 7, 5])
    print(f"Reordered query served from cache: {cached is signatures[2]}")


def demonstrate_memory(extractor):
    """Query the signature memory and round-trip it through a file."""
    print_section("STEP 3: Signature Memory")

    memory = extractor.memory
    print(f"\nStored signatures: {memory.stats['total_signatures']}")
    print(f"Signatures containing 7: {[s.primes for s in memory.find_by_prime(7)]}")

    print("\n  Resonance with [5, 7, 13]:")
    for match in extractor.find_resonant([5, 7, 13], top_k=3):
        print(f"    {match.signature.primes}: distance {match.distance:.4f}")

    equivalent = extractor.find_equivalent([3, 11])
    print(f"\n  Equivalent to [3, 11]: {[m.signature.primes for m in equivalent]}")

    target = extractor.get_alignment_target([3, 5, 11])
    print(f"\n  Alignment target for [3, 5, 11]: {target.primes if target else None}")

    with tempfile.TemporaryDirectory() as tmp:
        path = memory.save(Path(tmp) / "signatures.json.gz")
        restored = SignatureMemory.load(path, create_alexander_module)
        print(f"\n  Reloaded {len(restored)} signatures from {path.name}")


def main():
    """Run the complete demonstration."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("\n" + "=" * 70)
    print("  PRIME SIGNATURE - DEMONSTRATION")
    print("  Alexander Modules and Fitting Ideals of Prime Sets")
    print("=" * 70)

    extractor = SignatureExtractor(SignatureConfig(ell=2, top_k=3))

    demonstrate_alexander_module()
    demonstrate_signatures(extractor)
    demonstrate_memory(extractor)

    print_section("SUMMARY")
    print(f"\n{extractor.stats}")
    print("\n" + "=" * 70 + "\n")


if __name__ == "__main__":
    main()
