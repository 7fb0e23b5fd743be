from __future__ import annotations

import argparse
import uuid

import pygame  # type: ignore[import-not-found]

from memorymatch.paths import get_paths
from memorymatch.services.content import ContentService
from memorymatch.services.telemetry import TelemetryService

from .app import App, GameContext, LaunchOptions
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {raw!r}") from e
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memorymatch")
    parser.add_argument("--width", type=int, default=720)
    parser.add_argument("--height", type=int, default=860)
    parser.add_argument("--deck", default=None, help="deck id to start straight away")
    parser.add_argument("--seed", type=int, default=None, help="fixed shuffle seed")
    parser.add_argument("--delay-ms", type=_non_negative_int, default=None, help="override the reveal delay")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("Memory Match")

    clock = pygame.time.Clock()
    paths = get_paths()

    assets = AssetManager(repo_root=paths.repo_root, assets_dir=paths.assets_dir)
    content = ContentService(data_dir=paths.data_dir, schema_dir=paths.schema_dir)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", session=uuid.uuid4().hex)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        content=content,
        telemetry=telemetry,
        options=LaunchOptions(deck_id=args.deck, seed=args.seed, resolve_delay_ms=args.delay_ms),
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
