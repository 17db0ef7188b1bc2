"""Window, sound and main loop for the falling-block game."""

from __future__ import annotations

import argparse
import functools
import random
import sys
from collections.abc import Mapping
from os import PathLike
from pathlib import Path

import pygame

from .game import GAME_OVER_SOUND, LINE_SOUND, MUSIC, ROTATE_SOUND, Key, Tetris

BACKGROUND = (0, 102, 0)

_KEY_MAP = {
    pygame.K_r: Key.ROTATE,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_n: Key.RESTART,
}


class PygameSounds:
    """Sound effects and background music played through the pygame mixer."""

    def __init__(self, paths: Mapping[str, str | PathLike[str]]) -> None:
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._music = False
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error as exc:
            print(f"audio unavailable: {exc}", file=sys.stderr)
            return
        for name, path in paths.items():
            try:
                if name == MUSIC:
                    pygame.mixer.music.load(str(path))
                    self._music = True
                else:
                    self._sounds[name] = pygame.mixer.Sound(str(path))
            except (pygame.error, OSError) as exc:
                print(f"failed to load sound {name!r} from {path}: {exc}", file=sys.stderr)

    @property
    def loaded(self) -> frozenset[str]:
        """Names of the sounds that loaded successfully."""
        names = set(self._sounds)
        if self._music:
            names.add(MUSIC)
        return frozenset(names)

    def play(self, name: str) -> None:
        """Play a sound; the music loops and stops when the game is over."""
        if name == MUSIC:
            if self._music:
                pygame.mixer.music.play(-1)
            return
        if name == GAME_OVER_SOUND and self._music:
            pygame.mixer.music.stop()
        sound = self._sounds.get(name)
        if sound is not None:
            sound.play()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line options."""
    parser = argparse.ArgumentParser(prog="blockfall", description="Falling-block puzzle game.")
    parser.add_argument("--width", type=int, default=450, help="window width in pixels")
    parser.add_argument("--height", type=int, default=620, help="window height in pixels")
    parser.add_argument("--fps", type=int, default=60, help="frames per second")
    parser.add_argument("--rows", type=int, default=20, help="grid rows")
    parser.add_argument("--cols", type=int, default=10, help="grid columns")
    parser.add_argument("--cell-size", type=int, default=30, help="cell size in pixels")
    parser.add_argument("--interval", type=float, default=0.25, help="seconds between drops")
    parser.add_argument("--assets", type=Path, default=Path("assets"), help="assets directory")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    return parser.parse_args(argv)


def _load_font_provider(path: Path):
    @functools.lru_cache(maxsize=None)
    def font_for(size: int) -> pygame.font.Font:
        try:
            return pygame.font.Font(str(path), size)
        except (pygame.error, OSError):
            return pygame.font.Font(None, size)

    if not path.is_file():
        print("Font failed to load!", file=sys.stderr)
    return font_for


def main(argv: list[str] | None = None) -> int:
    """Open the window and run the game until it is closed."""
    args = parse_args(argv)
    pygame.init()
    try:
        screen = pygame.display.set_mode((args.width, args.height))
        pygame.display.set_caption("Blockfall")
        clock = pygame.time.Clock()

        sound_dir = args.assets / "sounds"
        sounds = PygameSounds(
            {
                MUSIC: sound_dir / "music.ogg",
                ROTATE_SOUND: sound_dir / "rotate.wav",
                LINE_SOUND: sound_dir / "line.wav",
                GAME_OVER_SOUND: sound_dir / "game_over.wav",
            }
        )
        font = _load_font_provider(args.assets / "fonts" / "main.otf")
        game = Tetris(
            args.rows,
            args.cols,
            args.cell_size,
            rng=random.Random(args.seed),
            sounds=sounds,
        )
        sounds.play(MUSIC)

        last_update = 0.0
        running = True
        while running:
            pressed = None
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif pressed is None:
                        pressed = _KEY_MAP.get(event.key)
            if not running:
                break

            game.input(pressed, bool(pygame.key.get_pressed()[pygame.K_DOWN]))

            now = pygame.time.get_ticks() / 1000
            if now - last_update > args.interval:
                last_update = now
                game.update()

            screen.fill(BACKGROUND)
            game.draw(screen, font)
            pygame.display.flip()
            clock.tick(args.fps)
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())