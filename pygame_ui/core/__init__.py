"""Core systems for the Crazy Eights UI."""

from pygame_ui.core.scene_manager import SceneManager
from pygame_ui.core.engine_adapter import EngineAdapter, UICardInfo, GameSnapshot

__all__ = [
    "SceneManager",
    "EngineAdapter",
    "UICardInfo",
    "GameSnapshot",
]
