"""
XDATA parsing module

Decodes auxiliary instrument telemetry (XDATA) carried in radiosonde packets.
Generic record dispatch with pluggable per-instrument decoders.
"""

from .calibration import get_oif411_cef
from .parser import XDataParser, decode_xdata_group, parse_xdata, split_xdata
from .parsers.oif411 import OIF411Parser, parse_oif411

__all__ = [
    "XDataParser",
    "OIF411Parser",
    "decode_xdata_group",
    "parse_xdata",
    "parse_oif411",
    "split_xdata",
    "get_oif411_cef",
]
