#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
XDATA instrument decoder plugins package.

Contains instrument-specific record decoders that plug into the generic
XDataParser. Decoders should expose a class with a
`parse(xdata: str, pressure: float) -> Dict[str, Any]` method returning
an empty dict for records they cannot decode.
"""
