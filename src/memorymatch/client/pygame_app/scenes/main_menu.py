from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.types import InvalidConfiguration
from memorymatch.services.content import DeckDefinition

from ..app import GameContext
from ..scene_base import SceneTransition, post_quit
from ..ui import Button, draw_text


class MainMenuScene:
    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._next: SceneTransition | None = None
        self._message = ""
        self._buttons: list[Button] = []
        self._build_ui()

    def _build_ui(self) -> None:
        x = 60
        y = 160
        w = 360
        h = 56
        gap = 14

        decks = list(self.ctx.decks.decks.values()) if self.ctx.decks is not None else []
        for i, deck in enumerate(decks):
            self._buttons.append(
                Button(
                    rect=pygame.Rect(x, y + (h + gap) * i, w, h),
                    text=f"{deck.name} ({len(deck.symbols)} pairs)",
                    on_click=lambda d=deck: self._on_play(d),
                )
            )
        self._buttons.append(
            Button(
                rect=pygame.Rect(x, y + (h + gap) * len(decks), w, h),
                text="Quit",
                on_click=post_quit,
            )
        )

    def _on_play(self, deck: DeckDefinition) -> None:
        from .memory import MemoryScene

        try:
            scene = MemoryScene(self.ctx, deck)
        except InvalidConfiguration as e:
            self._message = str(e)
            self.ctx.telemetry.log("game_rejected", {"deck": deck.id, "error": str(e)})
            return
        self._message = ""
        self._next = SceneTransition(scene)

    def handle_event(self, event: pygame.event.Event) -> None:
        for b in self._buttons:
            if b.handle_event(event):
                return

    def update(self, dt: float) -> SceneTransition | None:
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((12, 12, 18))
        fonts = self.ctx.assets.fonts
        draw_text(screen, fonts.big, "Memory Match", (60, 40))
        draw_text(screen, fonts.ui, "Find every pair as fast as you can.", (60, 100))
        for b in self._buttons:
            b.draw(screen, fonts.ui)
        if self._message:
            draw_text(screen, fonts.ui, self._message, (60, screen.get_height() - 60), color=(240, 120, 120))
