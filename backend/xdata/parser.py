#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Generic XDATA Parser with Pluggable Instrument Decoders

A radiosonde's XDATA field carries one record per auxiliary instrument on the
flight train. Several records may be concatenated with '#':

    0501034F02CA08B06700#800261FCA6F80012F6F40A75
    [OIF411 measurement] [unidentified 0x80 record]

The first two characters of every record are the instrument type code
(NOAA GML XDATA Instrument ID Allocation).

XDataParser responsibilities (this module)
------------------------------------------

1) Split the field into records
2) Route each record by its type code:
   - code with a registered decoder (OIF411) -> decode, merge fields into the result
   - other allocated code (CFH, COBALD, ...) -> result replaced by the label only
   - 0x80 or unallocated codes               -> skipped
3) Return the merged mapping. Records later in the field overwrite keys set
   by earlier ones.

Parsing is best effort: bad records are logged and skipped, never raised.
"""

import logging
from typing import Any, Dict, List, Optional

from .instruments import (
    UNKNOWN_INSTRUMENT_CODES,
    InstrumentCode,
    get_instrument_label,
    normalize_code,
)
from .parsers.oif411 import OIF411Parser

logger = logging.getLogger("xdata.parser")

XDATA_DELIMITER = "#"


def split_xdata(data: Any) -> List[str]:
    """
    Split an XDATA field into its records.

    Args:
        data: XDATA text, optionally several records joined by '#'

    Returns:
        Non-empty records in transmission order
    """
    if data is None:
        return []
    records = [r.strip() for r in str(data).split(XDATA_DELIMITER)]
    return [r for r in records if r]


class XDataParser:
    """
    Generic XDATA parser with pluggable instrument decoders

    Architecture:
    1. Split the XDATA field on '#'
    2. Decode each record with the decoder registered for its type code
    3. Fall back to a label-only result for allocated but undecoded instruments
    """

    def __init__(self):
        """Initialize parser with the decoder registry (type code -> decoder)"""
        self.decoders: Dict[str, Any] = {}
        self.register_decoder(InstrumentCode.OIF411, OIF411Parser())
        logger.debug("XDATA parser initialized")

    def register_decoder(self, code: str, decoder):
        """
        Register an instrument-specific record decoder

        Args:
            code: Two-character instrument type code
            decoder: Object with parse(xdata, pressure) method
        """
        self.decoders[normalize_code(code)] = decoder
        logger.debug(f"Registered XDATA decoder for: {normalize_code(code)}")

    def parse(self, data: Any, pressure: float) -> Dict[str, Any]:
        """
        Decode an XDATA field into a flat telemetry mapping

        Args:
            data: Raw XDATA text ('#'-delimited records)
            pressure: Ambient pressure (hPa) from the same telemetry frame

        Returns:
            dict of decoded fields, e.g.
            {
                'xdata_instrument': 'OIF411',
                'oif411_instrument_number': 1,
                'oif411_O3_partial_pressure': ...,
            }
            Empty when nothing could be decoded.
        """
        output: Dict[str, Any] = {}

        for record in split_xdata(data):
            code = normalize_code(record[0:2])

            decoder = self.decoders.get(code)
            if decoder is not None:
                output.update(self._decode_record(decoder, record, pressure))
                continue

            label = get_instrument_label(code)
            if label is not None:
                # No decoder yet, report the instrument only
                output = {"xdata_instrument": label}
                continue

            if code in UNKNOWN_INSTRUMENT_CODES:
                logger.debug("Skipping XDATA record from unidentified instrument 0x%s", code)
            else:
                logger.debug("Skipping XDATA record with unknown instrument code %r: %s", code, record)

        return output

    def parse_records(self, data: Any, pressure: float) -> List[Dict[str, Any]]:
        """
        Decode each XDATA record separately

        Returns:
            list with one entry per record:
            {
                'index': position in the field,
                'record': record text,
                'code': instrument type code,
                'instrument': label or None,
                'fields': decoded fields of this record alone
            }
        """
        results = []
        for index, record in enumerate(split_xdata(data)):
            code = normalize_code(record[0:2])
            label = get_instrument_label(code)
            decoder = self.decoders.get(code)

            fields: Dict[str, Any]
            if decoder is not None:
                fields = self._decode_record(decoder, record, pressure)
            elif label is not None:
                fields = {"xdata_instrument": label}
            else:
                fields = {}

            results.append(
                {
                    "index": index,
                    "record": record,
                    "code": code,
                    "instrument": label,
                    "fields": fields,
                }
            )
        return results

    def _decode_record(self, decoder, record: str, pressure: float) -> Dict[str, Any]:
        try:
            decoded: Optional[Dict[str, Any]] = decoder.parse(record, pressure)
        except Exception as e:
            logger.warning(f"XDATA decoder {decoder.__class__.__name__} failed on {record!r}: {e}")
            return {}
        return dict(decoded or {})


_default_parser = XDataParser()


def decode_xdata_group(data: Any, pressure: float) -> Dict[str, Any]:
    """
    Decode a radiosonde XDATA field.

    Args:
        data: XDATA text, one record or several joined by '#'
        pressure: Ambient pressure in hPa from the same telemetry frame

    Returns:
        Merged mapping of decoded fields (possibly empty). Never raises on
        malformed telemetry.
    """
    return _default_parser.parse(data, pressure)


# Name used by SondeHub-style ingestion code
parse_xdata = decode_xdata_group
