from __future__ import annotations

import json
import os
from pathlib import Path

# Allow headless generation (CI, terminals without a display)
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame  # type: ignore[import-not-found]


def _repo_root() -> Path:
    # tools/generate_placeholder_assets.py -> parents: [tools, repo_root]
    return Path(__file__).resolve().parents[1]


PALETTE: tuple[tuple[int, int, int], ...] = (
    (170, 90, 60),
    (60, 130, 90),
    (70, 100, 170),
    (150, 70, 140),
    (180, 150, 50),
    (60, 150, 160),
    (120, 120, 120),
    (190, 80, 90),
)

SIZE = (160, 160)


def generate_all() -> None:
    root = _repo_root()
    data_dir = root / "src" / "memorymatch" / "data"
    assets_dir = root / "assets"

    decks = json.loads((data_dir / "decks.json").read_text(encoding="utf-8"))["decks"]

    pygame.init()
    pygame.font.init()
    font = pygame.font.SysFont(None, 30)
    font_big = pygame.font.SysFont(None, 84)

    # Symbols shared between decks are written once
    written: set[str] = set()
    for deck in decks:
        for i, sym in enumerate(deck["symbols"]):
            rel = sym["image_path"]
            if rel in written:
                continue
            out_path = assets_dir / rel
            out_path.parent.mkdir(parents=True, exist_ok=True)
            _make_symbol(out_path, PALETTE[i % len(PALETTE)], sym["label"], font, font_big)
            written.add(rel)

    pygame.quit()
    print(f"Generated {len(written)} placeholder symbols under ./assets/")


def _make_symbol(
    path: Path,
    color: tuple[int, int, int],
    label: str,
    font: pygame.font.Font,
    font_big: pygame.font.Font,
) -> None:
    w, h = SIZE
    surf = pygame.Surface(SIZE, pygame.SRCALPHA)
    pygame.draw.rect(surf, color, pygame.Rect(0, 0, w, h), border_radius=18)
    pygame.draw.rect(surf, (0, 0, 0), pygame.Rect(0, 0, w, h), width=4, border_radius=18)

    initial = font_big.render(label[:1].upper(), True, (250, 250, 250))
    surf.blit(initial, initial.get_rect(center=(w // 2, h // 2 - 14)).topleft)
    name = font.render(label, True, (250, 250, 250))
    surf.blit(name, name.get_rect(center=(w // 2, h - 26)).topleft)
    pygame.image.save(surf, path.as_posix())


if __name__ == "__main__":
    generate_all()
