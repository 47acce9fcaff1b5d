"""Main entry point for the PyGame Crazy Eights UI."""

import sys

import pygame

from config import setup_logging
from pygame_ui.config import DIMENSIONS
from pygame_ui.core.engine_adapter import EngineAdapter
from pygame_ui.core.scene_manager import SceneManager
from pygame_ui.scenes.title_scene import TitleScene
from pygame_ui.scenes.game_scene import GameScene


class Application:
    """Main application class managing the game loop."""

    def __init__(self):
        """Initialize the application."""
        pygame.init()
        pygame.display.set_caption("Crazy Eights")

        self.screen = pygame.display.set_mode(
            (DIMENSIONS.SCREEN_WIDTH, DIMENSIONS.SCREEN_HEIGHT)
        )
        self.clock = pygame.time.Clock()
        self.running = True

        # One engine shared by the title and table scenes
        self.adapter = EngineAdapter()

        self.scene_manager = SceneManager(self.screen)
        self.scene_manager.register("title", TitleScene(self.adapter))
        self.scene_manager.register("game", GameScene(self.adapter))
        self.scene_manager.change_to("title")

    def handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue
            self.scene_manager.handle_event(event)

    def run(self) -> None:
        """Main application loop."""
        while self.running:
            dt = self.clock.tick(DIMENSIONS.TARGET_FPS) / 1000.0

            self.handle_events()
            self.scene_manager.update(dt)
            self.scene_manager.draw()

        self.adapter.stop()
        pygame.quit()
        sys.exit()


def main() -> None:
    """Entry point for the pygame UI."""
    setup_logging()
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
