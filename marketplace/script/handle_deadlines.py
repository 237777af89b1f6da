# script/handle_deadlines.py
"""
Cancel or complete orders whose deadlines have passed.

Meant for a system cron next to the database, e.g. hourly:
    0 * * * * cd marketplace && python -m script.handle_deadlines
"""
import logging
import os
import sys
from be.model.config import Config
from be.model.deadline import SqlDeadlineProcessor
from be.model.store import init_database


def main(environ=None) -> int:
    config = Config.from_env(environ, required=())
    logging.basicConfig(level=config.log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    init_database(root_dir, config.database_url)

    processor = SqlDeadlineProcessor(batch_limit=config.deadline_batch_limit)
    try:
        result = processor.handle_cron_deadlines()
    except Exception:
        logging.exception("deadline run failed")
        return 1

    print(f"cancelled {result.cancelled}, completed {result.completed}, total {result.total_processed}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
