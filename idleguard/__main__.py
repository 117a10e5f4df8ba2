import logging
import sys

from .console import IdleGuardConsole
from .cursor import create_nudger
from .dpi import set_dpi_awareness
from .keypress import KeypressGate


def main() -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )
    set_dpi_awareness()
    console = IdleGuardConsole(wait_for_key=KeypressGate().wait, nudger_factory=create_nudger)
    return console.run()


if __name__ == "__main__":
    sys.exit(main())
