"""
Command line entry point: parse bank/wallet SMS notifications into
structured transaction records.
"""
import sys
import json
import logging
import argparse
from pathlib import Path

from config import ParserConfig
from file_loader import MessageLoader
from sample import SAMPLE_MESSAGES, random_message
from sms_parser import SmsParser

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Extract transactions from bank SMS notifications')
    parser.add_argument('messages', nargs='*', help='Notification texts to parse')
    parser.add_argument('-f', '--file', help='Message file (.txt, .json, .csv, .xlsx, .xls)')
    parser.add_argument('--demo', action='store_true', help='Parse the built-in sample notifications')
    parser.add_argument('--simulate', action='store_true', help='Parse one randomly chosen sample notification')
    parser.add_argument('--config', help='JSON file overriding the keyword tables')
    parser.add_argument('-o', '--output', help='Output JSON file path')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose logging')
    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_arg_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.file and not Path(args.file).exists():
        print(f"Error: File not found - {args.file}")
        sys.exit(1)

    try:
        config = ParserConfig.from_json_file(args.config) if args.config else None

        messages = list(args.messages)
        if args.file:
            messages.extend(MessageLoader().load_file(args.file))
        if args.demo:
            messages.extend(SAMPLE_MESSAGES)
        if args.simulate:
            messages.append(random_message())

        if not messages:
            print("Error: No messages given. Pass texts, --file, --demo or --simulate.")
            sys.exit(1)

        result = SmsParser(config=config).parse_many(messages)
        output_data = result.model_dump(mode='json')

        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                json.dump(output_data, f, indent=2, ensure_ascii=False)
            print(f"Results written to: {args.output}")
        else:
            print(json.dumps(output_data, indent=2, ensure_ascii=False))

        metadata = result.processing_metadata
        print(f"\nSummary:")
        print(f"- Messages parsed: {metadata['messages_parsed']} of {metadata['messages_received']}")
        print(f"- Messages skipped: {metadata['messages_skipped']}")
        for reason, count in sorted(metadata['skip_reasons'].items()):
            print(f"  - {reason}: {count}")

        if result.total_count > 0:
            print(f"\nTotals by direction:")
            for direction, total in metadata['totals_by_direction'].items():
                print(f"- {direction}: {total}")

    except Exception as e:
        logger.error(f"Processing failed: {str(e)}")
        print(f"Error: {str(e)}")
        sys.exit(1)


if __name__ == "__main__":
    main()
