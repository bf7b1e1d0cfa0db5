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

"""
Tests for xdata/calibration.py pump efficiency correction.
"""

import numpy as np
import pytest

from xdata import calibration
from xdata.calibration import (
    OIF411_CEF,
    OIF411_CEF_PRESSURE,
    get_cef,
    get_oif411_cef,
    lerp,
)


class TestLerp:
    """Test cases for the lerp helper."""

    def test_lerp_endpoints(self):
        """Test that a=0 and a=1 return the endpoints."""
        assert lerp(1.131, 1.092, 0.0) == 1.131
        assert lerp(1.131, 1.092, 1.0) == 1.092

    def test_lerp_midpoint(self):
        """Test the midpoint of two values."""
        assert lerp(2.0, 4.0, 0.5) == pytest.approx(3.0)


class TestOIF411Cef:
    """Test cases for get_oif411_cef."""

    @pytest.mark.parametrize("pressure,factor", list(zip(OIF411_CEF_PRESSURE, OIF411_CEF)))
    def test_table_nodes_are_exact(self, pressure, factor):
        """Test that every table node returns exactly its factor."""
        assert get_oif411_cef(pressure) == factor

    @pytest.mark.parametrize("pressure", [0, -1, -1000.0, -1e9])
    def test_clamped_below_range(self, pressure):
        """Test that pressures at or below 0 hPa use the bottom factor."""
        assert get_oif411_cef(pressure) == 1.171

    @pytest.mark.parametrize("pressure", [1100, 1100.5, 1500, 1e9])
    def test_clamped_above_range(self, pressure):
        """Test that pressures at or above 1100 hPa use the top factor."""
        assert get_oif411_cef(pressure) == 1.0

    def test_interpolates_between_nodes(self):
        """Test linear interpolation between 3 hPa and 5 hPa."""
        assert get_oif411_cef(4) == pytest.approx(1.1115)

    def test_interpolation_matches_linear_blend(self):
        """Test an off-centre point between 10 hPa and 20 hPa."""
        expected = 1.055 + (1.032 - 1.055) * (12.5 - 10) / (20 - 10)
        assert get_oif411_cef(12.5) == pytest.approx(expected)

    def test_flat_segment(self):
        """Test the flat segment between 0 hPa and 2 hPa."""
        assert get_oif411_cef(1.5) == pytest.approx(1.171)

    def test_correction_never_increases_with_pressure(self):
        """Test that the correction is non-increasing over the whole table range."""
        values = [get_oif411_cef(p) for p in np.linspace(0, 1100, 500)]
        assert all(b <= a + 1e-12 for a, b in zip(values, values[1:]))

    def test_nan_falls_back_to_one(self):
        """Test that NaN pressure does not raise and yields the neutral factor."""
        assert get_oif411_cef(float("nan")) == 1.0

    def test_returns_float(self):
        """Test that the result is a plain float."""
        assert isinstance(get_oif411_cef(250), float)


class TestGetCef:
    """Test cases for the generic get_cef table interpolation."""

    def test_custom_table(self):
        """Test interpolation on a two-node table."""
        assert get_cef(5.0, [0.0, 10.0], [2.0, 1.0]) == pytest.approx(1.5)

    def test_custom_table_clamps(self):
        """Test clamping on a two-node table."""
        assert get_cef(-5.0, [0.0, 10.0], [2.0, 1.0]) == 2.0
        assert get_cef(50.0, [0.0, 10.0], [2.0, 1.0]) == 1.0

    def test_single_node_table_raises(self):
        """Test that a table with one node is rejected."""
        with pytest.raises(ValueError):
            get_cef(1.0, [0.0], [1.0])

    def test_length_mismatch_raises(self):
        """Test that pressures and factors must have the same length."""
        with pytest.raises(ValueError):
            get_cef(1.0, [0.0, 1.0, 2.0], [1.0, 1.0])

    def test_non_increasing_pressures_raise(self):
        """Test that pressures must be strictly increasing."""
        with pytest.raises(ValueError):
            get_cef(1.0, [0.0, 2.0, 2.0], [1.0, 1.0, 1.0])


class TestOIF411TableCheck:
    """Test cases for the import-time check of the OIF411 table."""

    def test_nodes_are_prepared_once(self):
        """Test that the OIF411 pressure nodes are held as a validated array."""
        assert isinstance(calibration._OIF411_NODES, np.ndarray)
        assert calibration._OIF411_NODES.tolist() == [float(p) for p in OIF411_CEF_PRESSURE]

    def test_lookup_skips_table_validation(self, monkeypatch):
        """Test that get_oif411_cef does not re-validate the table on each call."""

        def fail(*args, **kwargs):
            raise AssertionError("table validated per call")

        monkeypatch.setattr(calibration, "_validate_table", fail)

        assert get_oif411_cef(4) == pytest.approx(1.1115)
        with pytest.raises(AssertionError):
            get_cef(4, OIF411_CEF_PRESSURE, OIF411_CEF)
