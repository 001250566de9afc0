"""Engine layer: game loop and input sources."""

from chunkrealm.engine.game_loop import GameLoop, build_session
from chunkrealm.engine.input import IDLE, PlayerInput, ScriptedInput

__all__ = ["GameLoop", "IDLE", "PlayerInput", "ScriptedInput", "build_session"]
