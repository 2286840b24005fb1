"""Catalog hash shared by server telemetry, the catalog endpoint and the client.

Engine and controller agree on a spin only when both hold the same catalog
in the same order. The hash MUST be computed identically on both sides.
"""
import hashlib
import json

from slotspin.logic.catalog import SymbolCatalog


def get_catalog_hash(catalog: SymbolCatalog) -> str:
    """
    Generate hash of a symbol catalog.

    Returns 16-char hex hash of the ordered symbol list.
    """
    snapshot = [
        {"id": symbol.id, "glyph": symbol.glyph, "multiplier": symbol.multiplier}
        for symbol in catalog.symbols
    ]
    canonical = json.dumps(snapshot, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
