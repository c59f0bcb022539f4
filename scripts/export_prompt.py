#!/usr/bin/env python3
"""Write a client's IPS/CPS prompt (or raw JSON) from the configured store.

Usage:
  python scripts/export_prompt.py <client_id> [--kind ips|cps] [--format txt|json] [--out PATH]

Without --out the export goes to stdout.
"""
import os
import sys
import argparse

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import config
from logging_config import setup_logging
from questionnaire import get_schema
from questionnaire.export import (
    ExportUnavailableError, build_export, build_json_export, export_filename, write_export,
)
from storage import get_store
from storage.errors import IntakeError


def parse_args(argv=None):
    p = argparse.ArgumentParser()
    p.add_argument('client_id')
    p.add_argument('--kind', default='ips', choices=['ips', 'cps'])
    p.add_argument('--format', dest='fmt', default='txt', choices=['txt', 'json'])
    p.add_argument('--out', help='File or directory to write to; a directory gets the default file name')
    p.add_argument('--backend', default=None, help='Override STORE_BACKEND')
    return p.parse_args(argv)


def main(argv=None, store=None):
    args = parse_args(argv)
    setup_logging(config.LOG_LEVEL, config.LOG_FILE)
    store = store or get_store(args.backend)

    try:
        record = store.read_client(args.client_id)
    except IntakeError as e:
        print('Error:', e, file=sys.stderr)
        return 2
    if record is None:
        print(f'Client {args.client_id} not found', file=sys.stderr)
        return 1

    schema = get_schema(args.kind)
    text = build_json_export(record) if args.fmt == 'json' else build_export(schema, record)

    if not args.out:
        print(text)
        return 0

    path = args.out
    if os.path.isdir(path):
        path = os.path.join(path, export_filename(schema.key, record, args.fmt))
    try:
        write_export(path, text)
    except ExportUnavailableError as e:
        print(f'Export not saved: {e}', file=sys.stderr)
        return 1
    print(f'Export written to {path}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
