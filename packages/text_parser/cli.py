import argparse
import json
import sys

from packages.text_parser.parser import parse_transactions_with_fallbacks


def _read_text(args) -> str:
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def parse(args) -> int:
    result = parse_transactions_with_fallbacks(_read_text(args))

    if args.format == "csv":
        result.to_dataframe().to_csv(sys.stdout, index=False)
    else:
        print(json.dumps(result.model_dump(mode="json"), indent=2, ensure_ascii=False))

    if result.parse_method == "failed":
        print("Could not extract any transactions", file=sys.stderr)
        return 1
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Transaction text parser CLI")
    subparsers = parser.add_subparsers(dest="command")

    # Parse
    parse_parser = subparsers.add_parser("parse")
    parse_parser.add_argument(
        "--file", type=str, default=None, help="Path to text file (default: stdin)"
    )
    parse_parser.add_argument(
        "--format", choices=["json", "csv"], default="json", help="Output format"
    )

    args = parser.parse_args(argv)

    if args.command == "parse":
        return parse(args)

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
