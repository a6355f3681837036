"""Launch the game: ``python -m jungle_platformer [--level N] [--preset NAME]``."""

import argparse

from .config import get_config, CONFIGS
from .engine import GameEngine


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Play the jungle platformer")
    parser.add_argument("--level", type=int, default=1,
                        help="Level number to start on (1-based, clamped)")
    parser.add_argument("--preset", default="default", choices=sorted(CONFIGS),
                        help="Tuning preset")
    args = parser.parse_args(argv)

    engine = GameEngine(get_config(args.preset), level_index=args.level - 1)
    engine.run()


if __name__ == "__main__":
    main()
