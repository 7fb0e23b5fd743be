from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_text_centered(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    center: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center).topleft)


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (60, 60, 60) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        draw_text_centered(screen, font, self.text, self.rect.center)


def grid_rects(
    count: int,
    columns: int,
    area: pygame.Rect,
    gap: int = 8,
) -> list[pygame.Rect]:
    """Lay out `count` square cells row by row inside `area`."""
    if count <= 0:
        return []
    columns = max(1, min(columns, count))
    rows = (count + columns - 1) // columns
    side = min(
        (area.width - gap * (columns - 1)) // columns,
        (area.height - gap * (rows - 1)) // rows,
    )
    side = max(side, 8)
    used_w = side * columns + gap * (columns - 1)
    x0 = area.x + (area.width - used_w) // 2
    rects: list[pygame.Rect] = []
    for i in range(count):
        r, c = divmod(i, columns)
        rects.append(pygame.Rect(x0 + c * (side + gap), area.y + r * (side + gap), side, side))
    return rects
