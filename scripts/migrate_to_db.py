#!/usr/bin/env python3
"""Copy the JSON file store (`data/clients.json` + `data/clients/*.json`) into the SQLite store.

Usage:
  python scripts/migrate_to_db.py [--overwrite] [--data-dir DIR] [--db PATH]

By default clients already present in the DB are left alone; use --overwrite to replace them.
"""
import os
import sys
import argparse

# Make sure the project root is importable when run as a script
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import config
from logging_config import setup_logging
from storage import FileStore, SqlStore
from storage.errors import IntakeError


def parse_args(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument('--overwrite', action='store_true', help='Replace clients that already exist in the DB')
    p.add_argument('--data-dir', default=config.DATA_DIR, help='File store directory to read from')
    p.add_argument('--db', default=config.DB_PATH, help='SQLite database to write to')
    return p.parse_args(argv)


def migrate_clients(source, target, overwrite=False):
    copied = 0
    skipped = 0
    missing = 0
    for entry in source.list_clients():
        record = source.read_client(entry.id)
        if record is None:
            print(f'Client {entry.id} is in the index but its file is missing or unreadable, skipping')
            missing += 1
            continue
        if target.read_client(entry.id) is not None and not overwrite:
            print(f'Skipping existing client id={entry.id} (use --overwrite to replace)')
            skipped += 1
            continue
        if not record.client_name:
            record.client_name = entry.name
        target.import_record(record)
        copied += 1
    return copied, skipped, missing


def main(argv=None):
    args = parse_args(argv)
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    source = FileStore(args.data_dir)
    target = SqlStore(db_path=args.db)
    try:
        copied, skipped, missing = migrate_clients(source, target, overwrite=args.overwrite)
    except IntakeError as e:
        print('Migration failed:', e)
        return 1
    print(f'Clients migrated: {copied}, skipped: {skipped}, missing files: {missing}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
