from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from clockin_crew.config import get_settings_module
from clockin_crew.database.bootstrap import ensure_demo_profiles

logger = logging.getLogger("seed_db")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    ensure_demo_profiles(db_config)
    logger.info("Seeded demo profiles -> %s/%s", db_config.get("host"), db_config.get("database"))


if __name__ == "__main__":
    main()
