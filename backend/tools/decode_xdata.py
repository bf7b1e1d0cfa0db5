#!/usr/bin/env python3
"""
Decode radiosonde XDATA strings from the command line.

Examples:
  python backend/tools/decode_xdata.py 0501036402B958B07500 --pressure 10
  python backend/tools/decode_xdata.py "0501034F02CA08B06700#800261FCA6F80012F6F40A75"
  cat xdata.txt | python backend/tools/decode_xdata.py --records true
"""

import json
import sys
from typing import Iterable, List, Optional

from common.arguments import build_parser
from common.logger import get_logger
from xdata.instruments import InstrumentCode
from xdata.parser import XDataParser
from xdata.parsers.oif411 import OIF411Parser


def build_xdata_parser(args) -> XDataParser:
    parser = XDataParser()
    parser.register_decoder(
        InstrumentCode.OIF411,
        OIF411Parser(background_current=args.background_current, flow_rate=args.flow_rate),
    )
    return parser


def read_inputs(args, stdin=None) -> List[str]:
    if args.xdata:
        return list(args.xdata)
    stream = stdin if stdin is not None else sys.stdin
    return [line.strip() for line in stream if line.strip()]


def decode_lines(parser: XDataParser, lines: Iterable[str], pressure: float, records: bool = False):
    for line in lines:
        if records:
            yield {"xdata": line, "records": parser.parse_records(line, pressure)}
        else:
            yield {"xdata": line, "decoded": parser.parse(line, pressure)}


def main(argv: Optional[List[str]] = None, stdin=None, stdout=None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger(args)
    out = stdout if stdout is not None else sys.stdout

    parser = build_xdata_parser(args)
    lines = read_inputs(args, stdin)
    logger.info("Decoding %d XDATA string(s) at %.2f hPa", len(lines), args.pressure)

    for result in decode_lines(parser, lines, args.pressure, records=args.records):
        out.write(json.dumps(result, ensure_ascii=False) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
