"""
Utility functions for DLX Solver.
"""

import json
import hashlib
from typing import Dict, Optional
from pathlib import Path
from datetime import datetime

from .core.types import Grid


def grid_to_list(g: Optional[Grid]):
    """Grid as nested Python lists (None stays None) for JSON output."""
    return None if g is None else g.tolist()


# ==============================================================================
# Hash functions for receipts
# ==============================================================================

def puzzle_sha(puzzle: Grid) -> str:
    """
    Compute SHA-256 hash of a puzzle for identification.

    Args:
        puzzle: Grid with givens (0 = empty)

    Returns:
        Hex string of SHA-256 hash
    """
    payload = {"puzzle": puzzle.tolist()}
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()


def solution_sha(solved: Optional[Grid]) -> str:
    """
    Compute SHA-256 hash of a solved grid ("" when there is none).
    """
    if solved is None:
        return ""
    payload = {"solution": solved.tolist()}
    return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()


# ==============================================================================
# Receipt logging
# ==============================================================================

def default_run_dir() -> str:
    return f"runs/{datetime.now().strftime('%Y-%m-%d')}"


def log_receipt(record: Dict, out_dir: str = None) -> None:
    """
    Write receipt record to JSONL file.

    Args:
        record: Dictionary with receipt data
        out_dir: Output directory (default: runs/YYYY-MM-DD)
    """
    if out_dir is None:
        out_dir = default_run_dir()

    Path(out_dir).mkdir(parents=True, exist_ok=True)
    receipt_path = Path(out_dir) / "receipts.jsonl"

    with open(receipt_path, "a") as f:
        f.write(json.dumps(record, sort_keys=True) + "\n")


def build_receipt_record(result) -> Dict:
    """JSON-ready receipt record for a SudokuResult."""
    return {
        "puzzle": result.name,
        "status": result.status,
        "hashes": {
            "puzzle_sha": puzzle_sha(result.puzzle),
            "solution_sha": solution_sha(result.grid),
        },
        "receipts": result.receipts.to_dict() if result.receipts else {},
        "solutions": len(result.solutions),
        "metadata": result.metadata,
    }
