from backend.engine.gamerules.evaluator import Evaluator
from backend.engine.gamerules.transfer import DropResult, ZoneTransfer

__all__ = ["DropResult", "Evaluator", "ZoneTransfer"]
