import argparse
import logging
import random
import sys
from pathlib import Path

from pydantic import ValidationError

from agricap.common.config_manager import get_config
from agricap.common.data_manager import DataManager
from agricap.console.logic import StdoutConsole, StdinInputProvider
from agricap.game.logic import GameSession


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="agricap", description="Agricultural Capitalism Simulator")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible weather")
    parser.add_argument("--catalog", type=Path, default=None, help="directory holding crops.json and fields.json")
    parser.add_argument("--config", type=Path, default=None, help="flat JSON file overriding the default settings")
    parser.add_argument("--log-level", default=None, help="logging level, e.g. DEBUG or INFO")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    config_manager = get_config()
    data_manager = DataManager(args.catalog)
    try:
        if args.config:
            config_manager.load_config(data_manager.load_config(args.config))
        if args.log_level:
            config_manager.load_config({"log_level": args.log_level.upper()})
        settings = config_manager.settings()
        crops = data_manager.load_crops()
        fields = data_manager.load_fields()
    except (OSError, ValueError, ValidationError) as e:
        print(f"Could not start the game: {e}", file=sys.stderr)
        return 1

    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    seed = args.seed if args.seed is not None else random.SystemRandom().randrange(2 ** 32)
    logging.getLogger(__name__).info("starting game with seed %d", seed)

    console = StdoutConsole()
    session = GameSession(seed, StdinInputProvider(console=console), console, crops, fields, settings)
    try:
        session.run()
    except (EOFError, KeyboardInterrupt):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
