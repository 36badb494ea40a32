import numpy as np
import pytest
from numpy.testing import assert_array_equal

from odimh5 import Profile, VerticalProfile
from odimh5.errors import DimensionMismatch, ProductMismatch

from .conftest import T0


@pytest.fixture()
def vp_path(tmp_path):
    return tmp_path / "vp.h5"


def test_create_and_open(vp_path):
    heights = np.linspace(0.0, 5000.0, 20, dtype=np.float32)
    with VerticalProfile.create(vp_path, T0, -37.85, 144.75, 44.0) as vp:
        profile = vp.add_profile(20, T0 - 600, T0, interval=250.0, min_height=0.0, max_height=5000.0)
        profile.add_layer("HGHT", data=heights, no_data=-9999.0, undetect=-9999.0)
        profile.add_layer("UWND", data=np.ones(20, dtype=np.float32))
        profile.add_layer("QIND", is_quality=True, data=np.full(20, 0.5, dtype=np.float32))

    with VerticalProfile.open(vp_path) as vp:
        assert vp.profile_count() == 1
        profile = vp.profile(0)
        assert profile.levels == 20
        assert profile.start_time == T0 - 600
        assert profile.end_time == T0
        assert profile.interval == 250.0
        assert profile.min_height == 0.0
        assert profile.max_height == 5000.0
        assert profile.layer_count() == 3
        assert profile.layer_quantity(2) == "QIND"
        values, no_data, _ = profile.layer("HGHT").read()
        assert values.shape == (20,)
        assert_array_equal(values, heights)
        assert no_data == -9999.0


def test_layers_are_not_images(vp_path):
    with VerticalProfile.create(vp_path, T0, 0.0, 0.0, 0.0) as vp:
        vp.add_profile(10, T0, T0).add_layer("VWND")
        dset = vp.node.hnd["dataset1/data1/data"]
        assert dset.shape == (10,)
        assert "CLASS" not in dset.attrs
        assert dset.attrs.get("IMAGE_VERSION") is None


def test_optional_where_attributes_absent(vp_path):
    with VerticalProfile.create(vp_path, T0, 0.0, 0.0, 0.0) as vp:
        profile = vp.add_profile(10, T0, T0)
        assert profile.interval is None
        assert profile.min_height is None
        assert profile.node.hnd["where"].attrs["levels"] == 10


def test_open_scan_as_profile_fails(volume, scan):
    with pytest.raises(ProductMismatch):
        Profile.open(volume.node, 1)


def test_levels_override(vp_path):
    with VerticalProfile.create(vp_path, T0, 0.0, 0.0, 0.0) as vp:
        vp.add_profile(10, T0, T0).add_layer("UWND", data=np.zeros(10, dtype=np.float32))

    with VerticalProfile.open(vp_path) as vp:
        profile = vp.profile(0, levels=12)
        assert profile.levels == 12
        with pytest.raises(DimensionMismatch):
            profile.layer("UWND").read()


def test_profile_index_out_of_range(vp_path):
    with VerticalProfile.create(vp_path, T0, 0.0, 0.0, 0.0) as vp:
        with pytest.raises(IndexError):
            vp.profile(0)
