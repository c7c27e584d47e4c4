"""Allow running Calm as a module: python -m calm."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .app import CalmWindow

LOGGER = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_db()
    LOGGER.info("Calm ready")

    app = QApplication(sys.argv)
    app.setApplicationName("Calm")
    app.setOrganizationName("Calm")

    window = CalmWindow()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
