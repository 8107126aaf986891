from backend.engine.gamesolver.solver import Move, SimulationOutcome, SimulationResult, Solver

__all__ = ["Move", "SimulationOutcome", "SimulationResult", "Solver"]
