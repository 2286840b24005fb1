#!/usr/bin/env python3
"""
Audit simulation for the outcome engine.

Runs headless spins with a seeded source and reports per-reel index
frequencies, hit frequency and RTP against the catalog's theoretical values.

Usage:
    python -m scripts.audit_sim --rounds 100000 --seed AUDIT_2025 --out out/audit.csv
    python -m scripts.audit_sim --rounds 100000 --seed AUDIT_2025 --strict --out out/audit_strict.csv
"""
import argparse
import csv
import hashlib
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from slotspin.catalog_hash import get_catalog_hash
from slotspin.logic.catalog import DEFAULT_CATALOG, SymbolCatalog
from slotspin.logic.engine import OutcomeEngine
from slotspin.logic.models import REELS
from slotspin.logic.rng import SeededRandomSource


@dataclass
class SimulationStats:
    """Statistics accumulated during simulation."""
    catalog_size: int
    total_wagered: float = 0.0
    total_won: float = 0.0
    rounds: int = 0
    wins: int = 0
    max_win_x_observed: float = 0.0
    # index_counts[reel][index]
    index_counts: list[list[int]] = field(default_factory=list)

    def __post_init__(self):
        if not self.index_counts:
            self.index_counts = [[0] * self.catalog_size for _ in range(REELS)]

    @property
    def rtp(self) -> float:
        return (self.total_won / self.total_wagered * 100) if self.total_wagered > 0 else 0.0

    @property
    def hit_freq(self) -> float:
        return (self.wins / self.rounds * 100) if self.rounds > 0 else 0.0

    def frequencies(self, reel: int) -> list[float]:
        """Empirical frequency of each catalog index on one reel."""
        if self.rounds == 0:
            return [0.0] * self.catalog_size
        return [count / self.rounds for count in self.index_counts[reel]]

    def max_deviation(self) -> float:
        """Largest |frequency - 1/size| over every reel and index."""
        expected = 1 / self.catalog_size
        return max(
            abs(freq - expected)
            for reel in range(REELS)
            for freq in self.frequencies(reel)
        )

    def chi_square(self, reel: int) -> float:
        """Pearson chi-square of one reel's counts against uniform."""
        expected = self.rounds / self.catalog_size
        if expected == 0:
            return 0.0
        return sum((count - expected) ** 2 / expected for count in self.index_counts[reel])


def seed_to_int(seed_str: str) -> int:
    """Convert string seed to integer deterministically."""
    return int(hashlib.sha256(seed_str.encode()).hexdigest(), 16) % (2**31)


def get_timestamp_iso() -> str:
    """Get ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def theoretical_rtp(catalog: SymbolCatalog) -> float:
    """RTP in percent: each triple has probability 1/size**3."""
    size = len(catalog)
    return sum(symbol.multiplier for symbol in catalog.symbols) / size**3 * 100


def theoretical_hit_freq(catalog: SymbolCatalog) -> float:
    """Hit frequency in percent."""
    return 1 / len(catalog) ** 2 * 100


def run_simulation(
    rounds: int,
    seed_str: str,
    bet_amount: float = 1.0,
    strict: bool = False,
    catalog: SymbolCatalog = DEFAULT_CATALOG,
    verbose: bool = False,
) -> SimulationStats:
    """
    Run headless simulation.

    Args:
        rounds: Number of spins to simulate
        seed_str: Seed string for reproducibility
        bet_amount: Wager per spin
        strict: Use rejection sampling instead of modulo reduction
        catalog: Symbol catalog to draw from
        verbose: Print progress

    Returns:
        SimulationStats with aggregated results
    """
    engine = OutcomeEngine(
        catalog,
        rng=SeededRandomSource(seed=seed_to_int(seed_str)),
        strict_uniform=strict,
    )
    stats = SimulationStats(catalog_size=len(catalog))
    progress_interval = max(1, rounds // 100)

    for round_count in range(rounds):
        if verbose and round_count % progress_interval == 0:
            pct = (round_count / rounds) * 100
            print(f"\rProgress: {pct:.1f}%", end="", flush=True)

        outcome = engine.resolve(bet_amount)

        for reel, index in enumerate(outcome.draw):
            stats.index_counts[reel][index] += 1

        stats.total_wagered += bet_amount
        stats.total_won += outcome.payout
        stats.rounds += 1

        if outcome.payout > 0:
            stats.wins += 1
            stats.max_win_x_observed = max(stats.max_win_x_observed, outcome.payout / bet_amount)

    if verbose:
        print("\rProgress: 100.0%")

    return stats


def generate_csv(
    rounds: int,
    seed_str: str,
    strict: bool,
    stats: SimulationStats,
    output_path: str,
    catalog: SymbolCatalog = DEFAULT_CATALOG,
) -> None:
    """Write a one-row audit CSV."""
    row = {
        "timestamp": get_timestamp_iso(),
        "catalog_hash": get_catalog_hash(catalog),
        "rounds": rounds,
        "seed": seed_str,
        "strict": strict,
        "rtp": f"{stats.rtp:.4f}",
        "rtp_theoretical": f"{theoretical_rtp(catalog):.4f}",
        "hit_freq": f"{stats.hit_freq:.4f}",
        "hit_freq_theoretical": f"{theoretical_hit_freq(catalog):.4f}",
        "max_win_x": f"{stats.max_win_x_observed:.2f}",
        "max_freq_deviation": f"{stats.max_deviation():.6f}",
    }
    for reel in range(REELS):
        row[f"chi_square_reel{reel}"] = f"{stats.chi_square(reel):.4f}"

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=row.keys())
        writer.writeheader()
        writer.writerow(row)

    print(f"CSV written to: {output_path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Outcome engine audit simulation")
    parser.add_argument("--rounds", type=int, required=True, help="Number of spins to simulate")
    parser.add_argument("--seed", type=str, required=True, help="Seed string for reproducibility")
    parser.add_argument("--out", type=str, required=True, help="Output CSV path")
    parser.add_argument("--bet", type=float, default=1.0, help="Wager per spin")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Draw with rejection sampling instead of modulo reduction",
    )
    parser.add_argument(
        "--max-deviation",
        type=float,
        default=0.01,
        help="Fail when any index frequency is further than this from 1/size",
    )
    parser.add_argument("--verbose", action="store_true", help="Show progress")

    args = parser.parse_args(argv)

    print(f"Running simulation: rounds={args.rounds}, seed={args.seed}, strict={args.strict}")
    print(f"Catalog hash: {get_catalog_hash(DEFAULT_CATALOG)}")

    stats = run_simulation(
        rounds=args.rounds,
        seed_str=args.seed,
        bet_amount=args.bet,
        strict=args.strict,
        verbose=args.verbose,
    )

    generate_csv(
        rounds=args.rounds,
        seed_str=args.seed,
        strict=args.strict,
        stats=stats,
        output_path=args.out,
    )

    print(f"\nSummary:")
    print(f"  Rounds: {stats.rounds}")
    print(f"  Total wagered: {stats.total_wagered:.2f}")
    print(f"  Total won: {stats.total_won:.2f}")
    print(f"  RTP: {stats.rtp:.4f}% (theoretical {theoretical_rtp(DEFAULT_CATALOG):.4f}%)")
    print(f"  Hit frequency: {stats.hit_freq:.4f}% (theoretical {theoretical_hit_freq(DEFAULT_CATALOG):.4f}%)")
    for reel in range(REELS):
        freqs = ", ".join(f"{freq:.4f}" for freq in stats.frequencies(reel))
        print(f"  Reel {reel}: [{freqs}] chi2={stats.chi_square(reel):.2f}")

    deviation = stats.max_deviation()
    if deviation > args.max_deviation:
        print(f"\nASSERTION FAILED: max frequency deviation {deviation:.6f} > {args.max_deviation}")
        return 1

    print(f"\nASSERTION PASSED: max frequency deviation {deviation:.6f} <= {args.max_deviation}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
