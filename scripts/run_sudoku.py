#!/usr/bin/env python3
"""
Run the exact-cover solver over a dataset of puzzles.

Dataset: JSON object mapping puzzle name -> N x N grid (0 = empty cell).

Produces:
- solutions.json (name -> solved grid, or null)
- receipts.jsonl (one record per puzzle, for debugging and analysis)

Usage:
    python scripts/run_sudoku.py --dataset=data/sample_puzzles.json --output=runs/sample
    python scripts/run_sudoku.py --dataset=data/sample_puzzles.json --find-all --quiet
"""

import sys
import json
import argparse
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from dlx_solver import (
    G, Exhausted, ConflictingGivens,
    solve_sudoku, solve_backtracking, format_grid,
    grid_to_list, puzzle_sha, solution_sha, log_receipt, build_receipt_record
)
from dlx_solver.utils import default_run_dir


def run_backtracking(name: str, puzzle) -> dict:
    """Solve with the reference backtracking solver; returns a receipt record."""
    try:
        solved, stats = solve_backtracking(puzzle)
        status = "solved"
    except ConflictingGivens as e:
        solved, stats, status = None, {"detail": str(e)}, "conflicting_givens"
    except Exhausted as e:
        solved, stats, status = None, e.stats, "exhausted"
    return {
        "puzzle": name,
        "status": status,
        "method": "backtrack",
        "hashes": {"puzzle_sha": puzzle_sha(puzzle), "solution_sha": solution_sha(solved)},
        "stats": stats,
        "grid": grid_to_list(solved),
    }


def run_dataset(dataset_path: str, output_dir: str, *, method: str = "dlx",
                find_all: bool = False, timeout_s: float = None, verbose: bool = True):
    """
    Solve every puzzle in a dataset and write solutions.json + receipts.jsonl.

    Args:
        dataset_path: Path to the puzzles JSON file
        output_dir: Output directory for solutions and receipts
        method: "dlx" (exact cover) or "backtrack" (reference solver)
        find_all: Enumerate every solution (dlx only)
        timeout_s: Per-puzzle time budget (dlx only)
        verbose: Print progress messages
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)

    with open(dataset_path) as f:
        puzzles = json.load(f)

    solutions = {}
    solved_count = 0
    total_count = len(puzzles)

    if verbose:
        print("=" * 70)
        print(f"DLX Solver - Exact Cover by Dancing Links")
        print(f"Dataset: {dataset_path}")
        print(f"Output: {output_dir}")
        print(f"Method: {method}{' (all solutions)' if find_all else ''}")
        print(f"Puzzles: {total_count}")
        print("=" * 70)

    for idx, (name, rows) in enumerate(puzzles.items(), 1):
        puzzle = G(rows)

        if method == "backtrack":
            record = run_backtracking(name, puzzle)
            status = record["status"]
            grid = record.pop("grid")
        else:
            result = solve_sudoku(puzzle, name=name, find_all=find_all, timeout_s=timeout_s)
            record = build_receipt_record(result)
            record["method"] = "dlx"
            status = result.status
            grid = grid_to_list(result.grid)

        if status == "solved":
            solved_count += 1
        solutions[name] = grid

        log_receipt(record, out_dir=output_dir)

        if verbose:
            print(f"[{idx}/{total_count}] {name}: {status}")
            if method == "dlx" and result.receipts:
                print(f"    {result.receipts.summary}")
            if grid is not None:
                print(format_grid(G(grid)))

    solutions_path = Path(output_dir) / "solutions.json"
    with open(solutions_path, "w") as f:
        json.dump(solutions, f, indent=2)

    if verbose:
        print("=" * 70)
        print(f"COMPLETE: Solved {solved_count}/{total_count}")
        print(f"Solutions: {solutions_path}")
        print(f"Receipts: {Path(output_dir) / 'receipts.jsonl'}")
        print("=" * 70)

    return solved_count, total_count


def main():
    parser = argparse.ArgumentParser(description="Solve puzzles by exact cover (Dancing Links)")
    parser.add_argument(
        "--dataset",
        type=str,
        default="data/sample_puzzles.json",
        help="Path to puzzles JSON file"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory (default: runs/YYYY-MM-DD)"
    )
    parser.add_argument(
        "--method",
        choices=["dlx", "backtrack"],
        default="dlx",
        help="Solver to use"
    )
    parser.add_argument(
        "--find-all",
        action="store_true",
        help="Enumerate every solution instead of stopping at the first"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-puzzle time budget in seconds"
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress messages"
    )

    args = parser.parse_args()
    output_dir = args.output if args.output is not None else default_run_dir()

    solved, total = run_dataset(
        args.dataset,
        output_dir,
        method=args.method,
        find_all=args.find_all,
        timeout_s=args.timeout,
        verbose=not args.quiet,
    )

    # Exit code: 0 if solved > 0, 1 otherwise
    sys.exit(0 if solved > 0 else 1)


if __name__ == "__main__":
    main()
