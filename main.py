import logging
import tkinter as tk

from logics.config import get_settings
from UIs.app import PropertyCalculatorApp

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        logger.info("[GUI] Initialising window...")
        root = tk.Tk()
        PropertyCalculatorApp(root, settings=settings)
        logger.info("[GUI] Window ready, entering mainloop")
        root.mainloop()
    except Exception:
        logger.exception("[GUI] Application failed")
        raise


if __name__ == "__main__":
    main()
