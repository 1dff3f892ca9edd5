# pharmacy_pos/db/init_db.py
from __future__ import annotations

import argparse
import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from pharmacy_pos.db.base import Base
from pharmacy_pos.db.session import engine as default_engine

# Import all models so metadata is complete
from pharmacy_pos import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine | None = None, *, drop: bool = False) -> None:
    eng = engine or default_engine
    if drop:
        Base.metadata.drop_all(bind=eng)
    Base.metadata.create_all(bind=eng)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create pharmacy POS tables")
    parser.add_argument("--drop",
                        action="store_true",
                        help="drop existing tables first")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    try:
        init_db(drop=args.drop)
    except SQLAlchemyError:
        logger.exception("Table creation failed")
        raise
    logger.info("Tables ready: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    main()
