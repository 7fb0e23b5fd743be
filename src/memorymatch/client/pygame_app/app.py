from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pygame  # type: ignore[import-not-found]

from memorymatch.paths import Paths
from memorymatch.services.content import ContentService, DeckCatalog
from memorymatch.services.telemetry import TelemetryService

from .asset_manager import AssetManager
from .scene_base import Scene


@dataclass(frozen=True)
class LaunchOptions:
    deck_id: Optional[str] = None
    seed: Optional[int] = None
    resolve_delay_ms: Optional[int] = None


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    assets: AssetManager
    content: ContentService
    telemetry: TelemetryService
    options: LaunchOptions

    # Loaded at boot
    decks: Optional[DeckCatalog] = None


class App:
    """Frame loop: one scene at a time, swapped when `update` hands back a transition."""

    def __init__(self, ctx: GameContext, initial_scene: Scene, fps: int = 60) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.fps = fps
        self.frames = 0
        self.running = True

    def _frame(self) -> None:
        dt = self.ctx.clock.tick(self.fps) / 1000.0
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return
            self.scene.handle_event(event)

        tr = self.scene.update(dt)
        if tr is not None:
            self.scene = tr.next_scene

        self.scene.render(self.ctx.screen)
        pygame.display.flip()
        self.frames += 1

    def run(self) -> int:
        while self.running:
            self._frame()
        self.ctx.telemetry.log("app_closed", {"frames": self.frames, "scene": type(self.scene).__name__})
        return 0
