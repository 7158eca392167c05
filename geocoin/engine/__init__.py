"""Engine layer: session orchestration and sensor follow."""

from geocoin.engine.sensor import FixedPosition, LatestFix, PositionSource, ScriptedPath, SensorFollower
from geocoin.engine.session import GameSession

__all__ = ["FixedPosition", "GameSession", "LatestFix", "PositionSource", "ScriptedPath", "SensorFollower"]
