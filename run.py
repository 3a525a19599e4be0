import logging
import sys

from termui.app import TerminalApp
from termui.settings import load_settings

def main():
    cfg = load_settings(sys.argv[1] if len(sys.argv) > 1 else None)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = TerminalApp(cfg)
    app.run()

if __name__ == "__main__":
    main()
