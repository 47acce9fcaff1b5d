"""Scene classes for the Crazy Eights table."""

from pygame_ui.scenes.base_scene import BaseScene
from pygame_ui.scenes.title_scene import TitleScene
from pygame_ui.scenes.game_scene import GameScene

__all__ = ["BaseScene", "TitleScene", "GameScene"]
