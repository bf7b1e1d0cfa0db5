# Copyright (c) 2025 Efstratios Goudelis
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.


import argparse
import os

DEFAULT_LOG_CONFIG = os.path.join(os.path.dirname(os.path.dirname(__file__)), "logconfig.yaml")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Decode radiosonde XDATA strings into instrument telemetry fields."
    )
    parser.add_argument(
        "xdata",
        nargs="*",
        help="XDATA strings to decode ('#'-delimited records). Read from stdin when omitted.",
    )
    parser.add_argument(
        "--pressure",
        type=float,
        default=1000.0,
        help="Ambient pressure in hPa, used for the ozone pump efficiency correction",
    )
    parser.add_argument(
        "--flow-rate",
        type=float,
        default=28.5,
        help="OIF411 pump flow rate in seconds per 100 mL",
    )
    parser.add_argument(
        "--background-current",
        type=float,
        default=0.0,
        help="OIF411 ozone background current in uA",
    )
    parser.add_argument(
        "--records",
        type=lambda x: str(x).lower() in ("true", "1", "t"),
        default=False,
        help="Emit per-record decode results instead of the merged mapping",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level",
    )
    parser.add_argument(
        "--log-config",
        type=str,
        default=DEFAULT_LOG_CONFIG,
        help="Path to the logger configuration file",
    )
    return parser
