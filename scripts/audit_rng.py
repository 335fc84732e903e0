#!/usr/bin/env python3
"""
Statistical audit script for the seeded generators.

Draws a headless sample from one generator and writes a one-row CSV
summary (mean, extremes, bucket histogram, chi-square) for review.

Usage:
    python -m scripts.audit_rng --kind fast --draws 100000 --seed AUDIT_2026 --out out/audit_fast.csv
    python -m scripts.audit_rng --kind secure --draws 100000 --seed AUDIT_2026 --out out/audit_secure.csv
"""
import argparse
import csv
import hashlib
import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from seeded_rng import RNGBase, SecureSeededRNG, SeededRNG


logger = logging.getLogger(__name__)

GENERATORS: dict[str, type[RNGBase]] = {
    "fast": SeededRNG,
    "secure": SecureSeededRNG,
}


@dataclass
class AuditStats:
    """Statistics accumulated during an audit run."""
    draws: int = 0
    total: float = 0.0
    min_value: float = 1.0
    max_value: float = 0.0
    first_value: float | None = None
    bucket_counts: list[int] = field(default_factory=list)

    @property
    def mean(self) -> float:
        return self.total / self.draws if self.draws > 0 else 0.0

    def chi_square(self) -> float:
        """Pearson chi-square of bucket counts against a uniform expectation."""
        if self.draws == 0 or not self.bucket_counts:
            return 0.0
        expected = self.draws / len(self.bucket_counts)
        return sum((count - expected) ** 2 / expected for count in self.bucket_counts)


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically."""
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def run_audit(kind: str, draws: int, seed_str: str, buckets: int = 10) -> AuditStats:
    """
    Draw from a freshly seeded generator and accumulate statistics.

    Args:
        kind: 'fast' or 'secure'
        draws: Number of next() calls
        seed_str: Seed string for reproducibility
        buckets: Number of equal-width histogram buckets over [0, 1)
    """
    if buckets < 1:
        raise ValueError("buckets must be at least 1")

    rng = GENERATORS[kind](seed_to_int(seed_str))
    stats = AuditStats(bucket_counts=[0] * buckets)

    for _ in range(draws):
        value = rng.next()
        if stats.first_value is None:
            stats.first_value = value
        stats.draws += 1
        stats.total += value
        stats.min_value = min(stats.min_value, value)
        stats.max_value = max(stats.max_value, value)
        stats.bucket_counts[int(value * buckets)] += 1

    return stats


def generate_csv(
    kind: str,
    seed_str: str,
    stats: AuditStats,
    output_path: str,
) -> None:
    """Write the audit summary as a single CSV row."""
    row = {
        "timestamp": get_timestamp_iso(),
        "kind": kind,
        "seed": seed_str,
        "seed_int": seed_to_int(seed_str),
        "draws": stats.draws,
        "first_value": f"{stats.first_value:.10f}" if stats.first_value is not None else "",
        "mean": f"{stats.mean:.6f}",
        "min": f"{stats.min_value:.6f}",
        "max": f"{stats.max_value:.6f}",
        "buckets": len(stats.bucket_counts),
        "bucket_counts": " ".join(str(count) for count in stats.bucket_counts),
        "chi_square": f"{stats.chi_square():.4f}",
    }

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        writer.writeheader()
        writer.writerow(row)

    logger.info("CSV written to: %s", output_path)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Statistical audit of a seeded generator")
    parser.add_argument(
        "--kind",
        choices=sorted(GENERATORS),
        required=True,
        help="Generator: 'fast' (LCG) or 'secure' (ISAAC-style)",
    )
    parser.add_argument(
        "--draws",
        type=int,
        required=True,
        help="Number of values to draw",
    )
    parser.add_argument(
        "--seed",
        type=str,
        required=True,
        help="Seed string for reproducibility",
    )
    parser.add_argument(
        "--buckets",
        type=int,
        default=10,
        help="Histogram buckets over [0, 1)",
    )
    parser.add_argument(
        "--out",
        type=str,
        required=True,
        help="Output CSV path",
    )
    args = parser.parse_args(argv)

    if args.draws < 0:
        parser.error("--draws must be non-negative")
    if args.buckets < 1:
        parser.error("--buckets must be at least 1")

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    stats = run_audit(args.kind, args.draws, args.seed, args.buckets)
    generate_csv(args.kind, args.seed, stats, args.out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
