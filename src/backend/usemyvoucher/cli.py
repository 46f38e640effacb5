"""
Command-line extraction for checking voucher text by hand.

Usage:
    usemyvoucher-extract voucher.txt
    cat voucher.txt | usemyvoucher-extract --debug
"""

import argparse
import json
import sys
from typing import List, Optional

from usemyvoucher.config import settings
from usemyvoucher.services.extraction import VoucherExtractor


def main(argv: Optional[List[str]] = None) -> int:
    parser_args = argparse.ArgumentParser(description='Extract voucher fields from pasted or OCR text')
    parser_args.add_argument('file', nargs='?', type=str,
                             help='Text file to read (defaults to stdin)')
    parser_args.add_argument('--category', '-c', action='append', dest='categories',
                             help='Category label, repeat to build an ordered vocabulary')
    parser_args.add_argument('--debug', '-d', action='store_true',
                             help='Show which pattern produced each field')
    args = parser_args.parse_args(argv)

    if args.file:
        try:
            with open(args.file, encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            print(f"Error: cannot read {args.file}: {e}", file=sys.stderr)
            return 1
    else:
        text = sys.stdin.read()

    categories = args.categories if args.categories else settings.DEFAULT_CATEGORIES
    debug = {'patterns_matched': {}, 'warnings': []}
    fields = VoucherExtractor().parse(text, categories=categories, _debug=debug)

    output = {'fields': fields.to_dict()}
    if args.debug:
        output['debug'] = debug

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
