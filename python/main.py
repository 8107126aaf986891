#!/usr/bin/env python3
"""Category Sort.

Usage::

    python main.py                  # menu, NORMAL preselected
    python main.py -d hard --seed 7 # reproducible HARD session
    python main.py --calibrate      # estimator report for every difficulty
"""

import logging
import random
import statistics
import sys
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.models.difficulty import Difficulty  # noqa: E402


# -- helpers ------------------------------------------------------------------


def _print_calibration(samples: int, seed: int | None) -> None:
    """Deal *samples* games per difficulty and tabulate estimates and budgets."""
    import rich.box
    from rich.console import Console
    from rich.table import Table

    from backend.engine.gamegenerator import GameGenerator
    from backend.engine.gamesolver import SimulationOutcome, Solver

    rng = random.Random(seed)
    table = Table(title="Turn budget calibration", box=rich.box.ROUNDED)
    table.add_column("Difficulty", style="bold cyan")
    table.add_column("Cards", justify="right")
    table.add_column("Estimate min/mean/max", justify="right", style="yellow")
    table.add_column("Budget mean", justify="right", style="yellow")
    table.add_column("Cleared", justify="right", style="green")

    for difficulty in Difficulty:
        cards: list[int] = []
        estimates: list[int] = []
        budgets: list[int] = []
        cleared = 0
        for _ in range(samples):
            state = GameGenerator.generate(difficulty, rng)
            result = Solver.simulate(state)
            cards.append(state.total_cards)
            estimates.append(result.estimate)
            budgets.append(Solver.turn_budget(result.estimate, difficulty))
            cleared += result.outcome == SimulationOutcome.CLEARED
        table.add_row(
            difficulty.value.upper(),
            f"{statistics.mean(cards):.1f}",
            f"{min(estimates)} / {statistics.mean(estimates):.1f} / {max(estimates)}",
            f"{statistics.mean(budgets):.1f}",
            f"{cleared}/{samples}",
        )

    Console().print(table)


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    difficulty: Difficulty = typer.Option(
        Difficulty.NORMAL, "-d", "--difficulty",
        help="Difficulty preselected in the menu.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed for a reproducible session.",
    ),
    calibrate: bool = typer.Option(
        False, "--calibrate",
        help="Print an estimator calibration report and exit.",
    ),
    samples: int = typer.Option(
        200, "--samples",
        min=1,
        help="Deals per difficulty for --calibrate.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine setup and simulation details.",
    ),
) -> None:
    """Category Sort."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    if calibrate:
        _print_calibration(samples, seed)
        return

    from frontend.cli.rich.app import run

    run(difficulty=difficulty, seed=seed)


if __name__ == "__main__":
    app()
