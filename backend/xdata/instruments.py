#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
XDATA Instrument ID Constants

Two-character instrument type codes found at the start of every XDATA record,
following the NOAA GML "XDATA Instrument ID Allocation" table.
"""

from typing import Optional


class InstrumentCode:
    V7 = "01"
    OIF411 = "05"
    CFH = "08"
    FPH = "10"
    COBALD = "18"
    SLW = "28"
    POPS = "38"
    OPC = "39"
    PCFH = "3C"
    FLASH_B = "3D"
    TRAPS = "3E"
    SKYDEW = "3F"
    CICANUM = "41"
    POPS_ALT = "45"
    # Seen in the field alongside OIF411 records, allocation unknown
    UNKNOWN_80 = "80"


# Instrument labels, as reported in the xdata_instrument field
INSTRUMENT_LABELS = {
    InstrumentCode.V7: "V7",
    InstrumentCode.OIF411: "OIF411",
    InstrumentCode.CFH: "CFH",
    InstrumentCode.FPH: "FPH",
    InstrumentCode.COBALD: "COBALD",
    InstrumentCode.SLW: "SLW",
    InstrumentCode.POPS: "POPS",
    InstrumentCode.OPC: "OPC",
    InstrumentCode.PCFH: "PCFH",
    InstrumentCode.FLASH_B: "FLASH-B",
    InstrumentCode.TRAPS: "TRAPS",
    InstrumentCode.SKYDEW: "SKYDEW",
    InstrumentCode.CICANUM: "CICANUM",
    InstrumentCode.POPS_ALT: "POPS",
}

UNKNOWN_INSTRUMENT_CODES = frozenset({InstrumentCode.UNKNOWN_80})


def normalize_code(code: str) -> str:
    """Instrument codes are hex, compare them upper-cased"""
    return (code or "").strip().upper()


def get_instrument_label(code: str) -> Optional[str]:
    """
    Get the instrument label for a two-character XDATA type code.

    Args:
        code: Instrument code (case-insensitive)

    Returns:
        Label such as 'OIF411' or 'COBALD', or None for unknown codes
    """
    return INSTRUMENT_LABELS.get(normalize_code(code))


def is_known_instrument(code: str) -> bool:
    return normalize_code(code) in INSTRUMENT_LABELS
