import logging
import sys

from daybreak import config
from daybreak.engine import Engine


def setup_logging(cfg: config.SceneConfig) -> None:
    handler = logging.FileHandler(cfg.debug_log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger("daybreak")
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)


def main() -> None:
    path = sys.argv[1] if len(sys.argv) > 1 else None
    cfg = config.load_config(path)
    setup_logging(cfg)
    engine = Engine(cfg)
    engine.run()


if __name__ == "__main__":
    main()
