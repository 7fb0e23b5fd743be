from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from memorymatch.engine.clock import MonotonicClock, PollingScheduler
from memorymatch.engine.match import MatchEngine
from memorymatch.engine.types import MatchConfig
from memorymatch.services.content import DeckDefinition

from ..app import GameContext
from ..scene_base import Scene, SceneTransition
from ..ui import Button, draw_text, draw_text_centered, grid_rects

BOARD_TOP = 120
BOARD_MARGIN = 24


class MemoryScene:
    """Renders engine snapshots and forwards clicks. No rules live here."""

    def __init__(self, ctx: GameContext, deck: DeckDefinition) -> None:
        self.ctx = ctx
        self.deck = deck
        self._next: SceneTransition | None = None
        self._time_taken_ms: int | None = None
        self._logged = 0

        config = self._match_config()
        clock = MonotonicClock()
        self.scheduler = PollingScheduler(clock)
        self.engine = MatchEngine(
            deck.symbol_ids(),
            config=config,
            clock=clock,
            scheduler=self.scheduler,
            seed=ctx.options.seed,
            on_complete=self._on_complete,
        )

        w, h = ctx.screen.get_size()
        area = pygame.Rect(BOARD_MARGIN, BOARD_TOP, w - 2 * BOARD_MARGIN, h - BOARD_TOP - BOARD_MARGIN)
        self._card_rects = grid_rects(self.engine.board_size, deck.columns, area)

        self.btn_back = Button(rect=pygame.Rect(20, 20, 120, 40), text="< Back", on_click=self._on_back)
        self.btn_again = Button(rect=pygame.Rect(w // 2 - 150, h // 2 + 40, 300, 56), text="Play Again", on_click=self._on_play_again)
        self.btn_menu = Button(
            rect=pygame.Rect(w // 2 - 150, h // 2 + 110, 300, 56),
            text="Return to Main Menu",
            on_click=self._on_back,
        )
        self._log_started()

    def _match_config(self) -> MatchConfig:
        delay = self.ctx.options.resolve_delay_ms
        if delay is not None:
            return MatchConfig(resolve_delay_ms=delay)
        if self.ctx.decks is not None:
            return self.ctx.decks.match_config()
        return MatchConfig()

    def _go(self, scene: Scene) -> None:
        self._next = SceneTransition(scene)

    def _on_back(self) -> None:
        from .main_menu import MainMenuScene

        self._flush_events()
        self.ctx.telemetry.log("game_left", {"deck": self.deck.id, "status": self.engine.status})
        self._go(MainMenuScene(self.ctx))

    def _on_play_again(self) -> None:
        self._flush_events()
        self.engine.reset()
        self._logged = 0
        self._time_taken_ms = None
        self._log_started()

    def _log_started(self) -> None:
        self.ctx.telemetry.log(
            "game_started",
            {"deck": self.deck.id, "cards": self.engine.board_size, "generation": self.engine.generation},
        )

    def _on_complete(self, time_taken_ms: int) -> None:
        self._time_taken_ms = time_taken_ms

    def _flush_events(self) -> None:
        log = self.engine.event_log
        if self._logged < len(log):
            self.ctx.telemetry.log_events(log[self._logged :])
            self._logged = len(log)

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.engine.status == "complete":
            self.btn_again.handle_event(event)
            self.btn_menu.handle_event(event)
            return

        if self.btn_back.handle_event(event):
            return
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            position = self._hit_test_card(event.pos)
            if position is not None:
                # the engine decides whether the click counts
                self.engine.select_card(position)

    def _hit_test_card(self, pos: tuple[int, int]) -> int | None:
        for i, rect in enumerate(self._card_rects):
            if rect.collidepoint(pos):
                return i
        return None

    def update(self, dt: float) -> SceneTransition | None:
        self.scheduler.run_due()
        self._flush_events()
        return self._next

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((16, 18, 26))
        fonts = self.ctx.assets.fonts
        snap = self.engine.snapshot()

        if snap.is_complete:
            self._draw_game_over(screen)
            return

        self.btn_back.draw(screen, fonts.ui)
        draw_text(screen, fonts.big, "Memory Match", (160, 22))
        draw_text(screen, fonts.ui, f"Score: {snap.score} / {snap.pairs_total}", (BOARD_MARGIN, 80))
        seconds = self.engine.elapsed_ms() // 1000
        draw_text(screen, fonts.ui, f"Time: {seconds}s", (screen.get_width() - 140, 80))

        for card, rect in zip(snap.cards, self._card_rects):
            if card.face_up:
                sym = self.deck.get_symbol(str(card.symbol))
                if sym is not None:
                    face = self.ctx.assets.symbol_face(sym, (rect.width - 12, rect.height - 12))
                    pygame.draw.rect(screen, (235, 235, 235), rect, border_radius=8)
                    screen.blit(face, (rect.x + 6, rect.y + 6))
                if card.is_matched:
                    pygame.draw.rect(screen, (90, 200, 120), rect, width=3, border_radius=8)
            else:
                pygame.draw.rect(screen, (48, 56, 84), rect, border_radius=8)
                draw_text_centered(screen, fonts.big, "?", rect.center)
            pygame.draw.rect(screen, (0, 0, 0), rect, width=2, border_radius=8)

    def _draw_game_over(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        cx, cy = screen.get_width() // 2, screen.get_height() // 2
        draw_text_centered(screen, fonts.big, "Game Over!", (cx, cy - 80))
        taken = self._time_taken_ms if self._time_taken_ms is not None else self.engine.elapsed_ms()
        draw_text_centered(screen, fonts.ui, f"Time Taken: {taken // 1000} seconds", (cx, cy - 20))
        self.btn_again.draw(screen, fonts.ui)
        self.btn_menu.draw(screen, fonts.ui)
