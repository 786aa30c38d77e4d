from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from gradewise.config import get_settings_module
from gradewise.container import build_container, build_store


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    store = build_store(backend="mysql", db_config=db_config, auto_init_db=True)
    build_container(store=store, seed_demo_teacher=True)
    print(
        "OK: kv_store ready -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    )


if __name__ == "__main__":
    main()
