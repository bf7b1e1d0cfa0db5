#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
OIF411 Ozone Sounder XDATA parser

Decodes the XDATA records emitted by a Vaisala OIF411 ozone interface attached
to an RS41 radiosonde (see "Ozone Sounding with Vaisala Radiosonde RS41 User's
Guide", M211486EN). All fields are big-endian hex digits in the record text.

Two record types are distinguished by length:

ID record (21 characters, Table 19), e.g. 0501R20234850000006EI
  0..1   type code '05'
  2..3   u8 hex     instrument number
  4..11  raw text   serial number
  12..15 raw text   diagnostics word
  16..19 u16 hex    firmware version * 100

Measurement record (20 characters, Table 18), e.g. 0501036402B958B07500
  0..1   type code '05'
  2..3   u8 hex     instrument number
  4..7   i16 hex    pump temperature, 0.01 °C
  8..12  u20 hex    ozone cell current, 0.0001 uA
  13..14 u8 hex     battery voltage, 0.1 V
  15..17 u12 hex    pump current, mA
  18..19 u8 hex     external voltage, 0.1 V

Measurement records also yield the O3 partial pressure, which needs the
ambient pressure from the main telemetry frame for the pump efficiency
correction.

Fields whose text is not valid hex are left out of the result (and logged),
rather than decoded into a wrong number.
"""

from __future__ import annotations

import logging
import numbers
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from common.exceptions import XDataFieldError

from ..calibration import get_oif411_cef
from ..instruments import INSTRUMENT_LABELS, InstrumentCode

logger = logging.getLogger("xdata.parsers.oif411")

OIF411_TYPE_CODE = InstrumentCode.OIF411
OIF411_LABEL = INSTRUMENT_LABELS[OIF411_TYPE_CODE]

ID_RECORD_LENGTH = 21
MEASUREMENT_RECORD_LENGTH = 20

# Ozone partial pressure constant (mPa per uA*K*s/100mL)
O3_CONSTANT = 4.30851e-4
KELVIN_OFFSET = 273.15

DIAGNOSTICS = {
    "0000": "All OK",
    "0004": "Ozone pump temperature below −5 °C.",
    "0400": "Ozone pump battery voltage (+VBatt) is not connected to OIF411",
    "0404": "Ozone pump temp low, and +VBatt not connected.",
}

_HEX_RE = re.compile(r"[0-9A-Fa-f]+")


@dataclass(frozen=True)
class HexField:
    name: str
    offset: int
    width: int  # hex digits
    scale: Optional[float] = None
    signed: bool = False
    unit: Optional[str] = None


MEASUREMENT_FIELDS: List[HexField] = [
    HexField("oif411_ozone_pump_temp", 4, 4, scale=0.01, signed=True, unit="°C"),
    HexField("oif411_ozone_current_uA", 8, 5, scale=0.0001, unit="uA"),
    HexField("oif411_ozone_battery_v", 13, 2, scale=0.1, unit="V"),
    HexField("oif411_ozone_pump_curr_mA", 15, 3, unit="mA"),
    HexField("oif411_ext_voltage", 18, 2, scale=0.1, unit="V"),
]


def decode_hex(text: str, offset: int, width: int, name: str = "", signed: bool = False) -> int:
    """
    Decode `width` hex digits at `offset` as a big-endian integer.

    Signed values are two's complement over the field width, applied by
    masking the unsigned value (16-bit fields: subtract 0x10000 when bit 15 is set).

    Raises:
        XDataFieldError: if the slice is short or contains non-hex characters
    """
    chunk = text[offset : offset + width]
    if len(chunk) != width or not _HEX_RE.fullmatch(chunk):
        raise XDataFieldError(f"{name or 'field'} at {offset}: {chunk!r} is not {width} hex digits", name)
    value = int(chunk, 16)
    if signed:
        sign_bit = 1 << (width * 4 - 1)
        if value & sign_bit:
            value -= 1 << (width * 4)
    return value


def diagnostics_text(word: str) -> str:
    return DIAGNOSTICS.get(word, f"Unknown State: {word}")


class OIF411Parser:
    """
    Decode OIF411 ozone sounder XDATA records.

    Args:
        background_current: Ozone background current Ibg in uA
        flow_rate: Pump flow rate in seconds per 100 mL
        cef_lookup: Callable giving the pump efficiency correction for a pressure
    """

    def __init__(
        self,
        background_current: float = 0.0,
        flow_rate: float = 28.5,
        cef_lookup: Callable[[float], float] = get_oif411_cef,
    ):
        self.background_current = background_current
        self.flow_rate = flow_rate
        self.cef_lookup = cef_lookup

    def parse(self, xdata: Any, pressure: float) -> Dict[str, Any]:
        xdata = str(xdata)

        if len(xdata) < MEASUREMENT_RECORD_LENGTH:
            logger.debug("OIF411 record too short (%d chars): %s", len(xdata), xdata)
            return {}

        if xdata[0:2] != OIF411_TYPE_CODE:
            logger.debug("Not an OIF411 record: %s", xdata)
            return {}

        try:
            instrument_number = decode_hex(xdata, 2, 2, "oif411_instrument_number")
        except XDataFieldError as e:
            logger.warning("Discarding OIF411 record %s: %s", xdata, e)
            return {}

        out: Dict[str, Any] = {
            "xdata_instrument": OIF411_LABEL,
            "oif411_instrument_number": instrument_number,
        }

        if len(xdata) == ID_RECORD_LENGTH:
            out.update(self._parse_id(xdata))
            return out

        if len(xdata) == MEASUREMENT_RECORD_LENGTH:
            out.update(self._parse_measurement(xdata, pressure))
            return out

        logger.debug("Unrecognised OIF411 record length %d: %s", len(xdata), xdata)
        return {}

    def _parse_id(self, xdata: str) -> Dict[str, Any]:
        out: Dict[str, Any] = {"oif411_serial": xdata[4:12]}
        out["oif411_diagnostics"] = diagnostics_text(xdata[12:16])
        try:
            out["oif411_version"] = f"{decode_hex(xdata, 16, 4, 'oif411_version') / 100:.2f}"
        except XDataFieldError as e:
            logger.warning("OIF411 ID record %s: %s", xdata, e)
        return out

    def _parse_measurement(self, xdata: str, pressure: float) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for field in MEASUREMENT_FIELDS:
            try:
                raw = decode_hex(xdata, field.offset, field.width, field.name, field.signed)
            except XDataFieldError as e:
                logger.warning("OIF411 measurement record %s: %s", xdata, e)
                continue
            out[field.name] = raw * field.scale if field.scale is not None else raw

        pump_temp = out.get("oif411_ozone_pump_temp")
        current = out.get("oif411_ozone_current_uA")
        if pump_temp is not None and current is not None:
            # Pressure comes from the main frame and may be missing
            if not isinstance(pressure, numbers.Real):
                logger.warning("OIF411 partial pressure skipped, no usable pressure: %r", pressure)
                return out
            try:
                out["oif411_O3_partial_pressure"] = self.o3_partial_pressure(current, pump_temp, pressure)
            except (TypeError, ValueError) as e:
                logger.warning("OIF411 partial pressure skipped at pressure %r: %s", pressure, e)
        return out

    def o3_partial_pressure(self, current_ua: float, pump_temp_c: float, pressure: float) -> float:
        """O3 partial pressure from cell current (uA), pump temperature (°C) and ambient pressure (hPa)"""
        cef = self.cef_lookup(pressure)
        return (
            O3_CONSTANT
            * (current_ua - self.background_current)
            * (pump_temp_c + KELVIN_OFFSET)
            * self.flow_rate
            * cef
        )


_default_parser = OIF411Parser()


def parse_oif411(xdata: Any, pressure: float) -> Dict[str, Any]:
    """Decode a single OIF411 record with the nominal calibration constants"""
    return _default_parser.parse(xdata, pressure)


__all__ = ["OIF411Parser", "parse_oif411", "decode_hex", "diagnostics_text", "DIAGNOSTICS"]
