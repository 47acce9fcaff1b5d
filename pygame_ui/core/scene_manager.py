"""Scene manager for handling game states."""

from typing import Dict, List, Optional, TYPE_CHECKING

import pygame

if TYPE_CHECKING:
    from pygame_ui.scenes.base_scene import BaseScene


class SceneManager:
    """Manages game scenes and switching between them.

    Supports:
    - Named scene registry
    - Scene stack (push/pop for overlays)
    - Scene lifecycle (enter/exit)
    """

    def __init__(self, screen: pygame.Surface):
        """Initialize the scene manager.

        Args:
            screen: The main pygame display surface
        """
        self.screen = screen
        self._scenes: Dict[str, "BaseScene"] = {}
        self._scene_stack: List["BaseScene"] = []

    @property
    def current_scene(self) -> Optional["BaseScene"]:
        """Get the currently active scene."""
        return self._scene_stack[-1] if self._scene_stack else None

    def register(self, name: str, scene: "BaseScene") -> None:
        """Register a scene with a name."""
        self._scenes[name] = scene
        scene.scene_manager = self

    def get_scene(self, name: str) -> Optional["BaseScene"]:
        return self._scenes.get(name)

    def change_to(self, scene_name: str) -> None:
        """Change to a different scene (replaces current).

        Args:
            scene_name: Name of the scene to change to
        """
        if scene_name not in self._scenes:
            raise ValueError(f"Scene '{scene_name}' not registered")

        if self.current_scene:
            self.current_scene.on_exit()
            self._scene_stack.pop()

        new_scene = self._scenes[scene_name]
        self._scene_stack.append(new_scene)
        new_scene.on_enter()

    def push(self, scene_name: str) -> None:
        """Push a scene onto the stack."""
        if scene_name not in self._scenes:
            raise ValueError(f"Scene '{scene_name}' not registered")

        if self.current_scene:
            self.current_scene.on_pause()

        new_scene = self._scenes[scene_name]
        self._scene_stack.append(new_scene)
        new_scene.on_enter()

    def pop(self) -> None:
        """Pop the current scene, never the last one."""
        if len(self._scene_stack) <= 1:
            return

        self.current_scene.on_exit()
        self._scene_stack.pop()
        if self.current_scene:
            self.current_scene.on_resume()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Pass event to current scene."""
        if self.current_scene:
            return self.current_scene.handle_event(event)
        return False

    def update(self, dt: float) -> None:
        if self.current_scene:
            self.current_scene.update(dt)

    def draw(self) -> None:
        """Draw current scene."""
        if not self.current_scene:
            self.screen.fill((0, 0, 0))
        else:
            self.current_scene.draw(self.screen)
        pygame.display.flip()
