"""
Offline analyzer: run the import pipeline on a local spreadsheet and print
what would be imported, enhanced or rejected.
"""

import argparse
import json
import sys
from pathlib import Path

from .errors import ExpenseImportError
from .importer import import_file
from .rules import ImportConfig
from .settings import configure_logging, settings


def analyze(args) -> int:
    path = Path(args.file)
    if not path.exists():
        print(f"[ERROR] File not found: {path}")
        return 2

    config = ImportConfig.default(high_value_threshold=settings.HIGH_VALUE_THRESHOLD)
    try:
        result = import_file(path.read_bytes(), path.name, config)
    except ExpenseImportError as exc:
        print(f"[ERROR] {exc}")
        return 2

    report = result.report
    summary = report.summary
    print(f"[INFO] Columns detected: {report.columns}")
    print(f"[INFO] Rows: {summary.total}  imported: {summary.imported}  skipped: {summary.skipped}")
    print(f"[INFO] Errors: {summary.errors}  enhanced: {summary.enhanced}  warnings: {summary.warnings}")
    print(f"[INFO] Data quality: {summary.data_quality} ({summary.success_rate})")

    for title, items in (
        ("Errors", report.errors),
        ("Unrecognized values", report.rejections),
        ("Warnings", report.warnings),
        ("Enhancements", report.enhancements),
    ):
        if items:
            print(f"\n{title}:")
            for item in items:
                print(f"  {item.message}")

    if args.verbose and report.insights:
        print("\nInsights:")
        for item in report.insights:
            print(f"  {item.message}")

    if args.records:
        records = [r.model_dump(mode="json", by_alias=True) for r in result.records]
        print(json.dumps(records, ensure_ascii=False, indent=2))

    for rec in report.recommendations:
        print(f"[INFO] {rec}")

    return 1 if summary.errors else 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Check expense spreadsheets against the canonical categories, contracts, "
                    "payment methods and banks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show problems found in a spreadsheet
  expense-import analyze despesas-julho.xlsx

  # Also print the records that would be imported
  expense-import analyze despesas.csv --records
        """
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_analyze = sub.add_parser("analyze", help="Analyze a spreadsheet without importing it")
    p_analyze.add_argument("file", help="Path to a .xlsx, .xlsm or .csv file")
    p_analyze.add_argument("--records", action="store_true",
                           help="Print the normalized records as JSON")
    p_analyze.add_argument("--verbose", "-v", action="store_true",
                           help="Show insights and debug logging")
    p_analyze.set_defaults(func=analyze)

    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
