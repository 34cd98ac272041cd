import argparse
import json
import logging
import sys
from pathlib import Path

from ohs_report.html_report import build_html_report
from ohs_report.pdf import generate_pdf, report_filename
from ohs_report.validator import validate

logger = logging.getLogger("ohs_report")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate an OHS report and render it as a PDF.")
    parser.add_argument("report", type=Path, help="Path to the report JSON file")
    parser.add_argument("-o", "--output", type=Path, help="Output file (defaults to ./reports/)")
    parser.add_argument("--html", action="store_true", help="Write the HTML preview instead of a PDF")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        candidate = json.loads(args.report.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Cannot read %s: %s", args.report, exc)
        return 2

    result = validate(candidate)
    if not result.ok:
        for violation in result.violations:
            print(f"{violation.path or '<report>'}: {violation.message}", file=sys.stderr)
        logger.error("%s has %d problem(s); nothing rendered", args.report, len(result.violations))
        return 1

    report = result.report
    if args.html:
        out = args.output or args.report.with_suffix(".html")
        out.write_text(build_html_report(report), encoding="utf-8")
        logger.info("Wrote %s", out)
        return 0

    if args.output:
        generate_pdf(report, output_dir=args.output.parent, filename=args.output.name)
    else:
        generate_pdf(report, filename=report_filename(report))
    return 0


if __name__ == "__main__":
    sys.exit(main())
