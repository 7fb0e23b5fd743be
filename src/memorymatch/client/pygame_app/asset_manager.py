from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from memorymatch.services.content import SymbolDefinition

PLACEHOLDER_COLORS: tuple[tuple[int, int, int], ...] = (
    (170, 90, 60),
    (60, 130, 90),
    (70, 100, 170),
    (150, 70, 140),
    (180, 150, 50),
    (60, 150, 160),
    (120, 120, 120),
    (190, 80, 90),
)


def placeholder_color(symbol_id: str) -> tuple[int, int, int]:
    return PLACEHOLDER_COLORS[sum(symbol_id.encode("utf-8")) % len(PLACEHOLDER_COLORS)]


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class AssetManager:
    def __init__(self, repo_root: Path, assets_dir: Path) -> None:
        self.repo_root = repo_root
        self.assets_dir = assets_dir
        self._cache: dict[tuple[str, int, int], pygame.Surface] = {}

        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 28),
            small=pygame.font.SysFont(None, 20),
            big=pygame.font.SysFont(None, 44),
        )

    def _resolve(self, path_str: str) -> Path:
        p = Path(path_str)
        if p.is_absolute():
            return p
        # Allow data files to reference "assets/..."
        if path_str.startswith("assets/"):
            return self.repo_root / path_str
        return self.assets_dir / path_str

    def _load(self, path_str: str, size: tuple[int, int] | None) -> pygame.Surface | None:
        path = self._resolve(path_str)
        if not path.exists():
            return None
        try:
            img = pygame.image.load(path.as_posix()).convert_alpha()
        except pygame.error:
            return None
        if size is not None:
            img = pygame.transform.smoothscale(img, size)
        return img

    def symbol_face(self, symbol: SymbolDefinition, size: tuple[int, int]) -> pygame.Surface:
        """Image for a face-up card, or a labelled colour tile when the art is missing."""
        key = (symbol.image_path, size[0], size[1])
        if key in self._cache:
            return self._cache[key]

        img = self._load(symbol.image_path, size)
        if img is None:
            img = pygame.Surface(size)
            img.fill(placeholder_color(symbol.id))
            label = self.fonts.small.render(symbol.label, True, (250, 250, 250))
            img.blit(label, label.get_rect(center=(size[0] // 2, size[1] // 2)).topleft)
        self._cache[key] = img
        return img
