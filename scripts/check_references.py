#!/usr/bin/env python3
"""
Report department, category and subcategory references that no longer resolve.

Read-only: nothing in the database is modified. Exits with status 1 when any
stored reference value matches no record.
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from grocery.database import db, get_database
from grocery.services.reference_audit_service import reference_audit_tool
from grocery.services.reference_errors import StoreUnavailable


def print_report(report):
    print(f"{'collection.field':<32} {'distinct':>8} {'native':>8} {'legacy':>8} {'unresolved':>10}")
    for row in report["data"]:
        name = f"{row['collection']}.{row['field']}"
        print(f"{name:<32} {row['distinct_values']:>8} {row['native_keys']:>8} {row['legacy_codes']:>8} {row['unresolved']:>10}")
        for raw in row["unresolved_sample"]:
            print(f"    unresolved: {raw}")
    print(f"\nTotal unresolved values: {report['unresolved_total']}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Report unresolved catalog references")
    parser.add_argument("--sample-size", type=int, default=20, help="unresolved values to list per field")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        report = reference_audit_tool(get_database()).reference_audit(sample_size=args.sample_size)
    except StoreUnavailable as exc:
        print(f"Database unavailable: {exc}", file=sys.stderr)
        return 2
    finally:
        db.close_connections()

    print_report(report)
    return 1 if report["unresolved_total"] else 0


if __name__ == "__main__":
    sys.exit(main())
