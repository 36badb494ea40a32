import h5py
import numpy as np
import pytest

from odimh5 import Profile, Scan, Volume
from odimh5.errors import OpenFailure, ProductMismatch
from odimh5.layers import LayerInfo, next_index

from .conftest import T0


def _five_layers(scan):
    for quantity in ["DBZH", "VRAD", "WRAD"]:
        scan.add_layer(quantity)
    for quantity in ["QIND", "CLASS"]:
        scan.add_layer(quantity, is_quality=True)


def test_create_writes_metadata(scan):
    what = scan.node.hnd["what"]
    where = scan.node.hnd["where"]
    assert what.attrs["product"] == b"SCAN"
    assert what.attrs["startdate"] == b"20110313"
    assert what.attrs["starttime"] == b"070640"
    assert what.attrs["endtime"] == b"070710"
    assert where.attrs["nrays"] == 360
    assert where.attrs["nbins"] == 500
    assert where.attrs["a1gate"] == 0
    assert where.attrs["rscale"] == 250.0
    assert "how" not in scan.node.hnd
    assert scan.layer_count() == 0


def test_range_start_stored_in_km(volume):
    scan = volume.add_scan(1.3, 360, 500, 17, 1500.0, 250.0, T0, T0 + 30)
    assert scan.node.hnd["where"].attrs["rstart"] == 1.5
    assert scan.range_start == 1500.0
    assert scan.first_azimuth == 17


def test_geometry_round_trip(volume_path):
    with Volume.create(volume_path, T0, 0.0, 0.0, 0.0) as vol:
        vol.add_scan(2.4, 420, 600, 33, 250.0, 500.0, T0, T0 + 42)

    with Volume.open(volume_path) as vol:
        scan = vol.scan(0)
        assert scan.index == 1
        assert scan.elevation == 2.4
        assert scan.azimuth_count == 420
        assert scan.range_bin_count == 600
        assert scan.first_azimuth == 33
        assert scan.range_start == pytest.approx(250.0)
        assert scan.range_scale == 500.0
        assert scan.start_time == T0
        assert scan.end_time == T0 + 42


def test_layer_enumeration_order(scan):
    _five_layers(scan)
    assert scan.layer_count() == 5
    assert scan.layer_quantity(0) == "DBZH"
    assert scan.layer_quantity(4) == "CLASS"
    assert scan.layer(3).is_quality is True
    assert scan.layer(2).is_quality is False


def test_quality_index_is_independent(scan):
    assert scan.add_layer("DBZH").index == 1
    assert scan.add_layer("VRAD").index == 2
    quality = scan.add_layer("QIND", is_quality=True)
    assert quality.index == 1
    assert quality.node.path == "/dataset1/quality1"
    assert scan.add_layer("WRAD").index == 3


def test_next_index():
    infos = [LayerInfo(False, 1, "DBZH"), LayerInfo(False, 2, "VRAD"), LayerInfo(True, 1, "QIND")]
    assert next_index(infos, False) == 3
    assert next_index(infos, True) == 2
    assert next_index([], True) == 1


def test_reopen_discovers_layers(volume_path):
    with Volume.create(volume_path, T0, 0.0, 0.0, 0.0) as vol:
        _five_layers(vol.add_scan(0.5, 10, 20, 0, 0.0, 250.0, T0, T0 + 30))

    with Volume.open(volume_path) as vol:
        scan = vol.scan(0)
        assert scan.layer_count() == 5
        assert [scan.layer_quantity(i) for i in range(5)] == ["DBZH", "VRAD", "WRAD", "QIND", "CLASS"]
        layer = scan.layer("QIND")
        assert (layer.is_quality, layer.index, layer.dims) == (True, 1, (10, 20))


def test_missing_layer_lookup(scan):
    scan.add_layer("DBZH")
    assert scan.layer("NONEXISTENT") is None
    with pytest.raises(IndexError):
        scan.layer(1)


def test_discovery_stops_at_first_gap(volume_path):
    with Volume.create(volume_path, T0, 0.0, 0.0, 0.0) as vol:
        scan = vol.add_scan(0.5, 10, 20, 0, 0.0, 250.0, T0, T0 + 30)
        for quantity in ["DBZH", "VRAD", "WRAD"]:
            scan.add_layer(quantity)
        scan.add_layer("QIND", is_quality=True)

    with h5py.File(volume_path, "r+") as f:
        del f["dataset1/data2"]

    with Volume.open(volume_path) as vol:
        scan = vol.scan(0)
        assert [scan.layer_quantity(i) for i in range(scan.layer_count())] == ["DBZH", "QIND"]


def test_open_missing_dataset(volume):
    with pytest.raises(OpenFailure):
        Scan.open(volume.node, 1)


def test_product_mismatch(volume):
    # a profile dataset under a volume root, opened as a scan
    Profile.create(volume.node, 1, 20, T0, T0 + 60)
    with pytest.raises(ProductMismatch) as info:
        Scan.open(volume.node, 1)
    assert info.value.name == "product"


def test_how_attributes(volume_path):
    with Volume.create(volume_path, T0, 0.0, 0.0, 0.0) as vol:
        scan = vol.add_scan(0.5, 10, 20, 0, 0.0, 250.0, T0, T0 + 30)
        scan.set_how("NI", 26.4)
        scan.set_how("task", "VOL_A")
        scan.set_how("dealiased", True)
        scan.set_how("rpm", 2)
        scan.set_how("angles", [0.5, 1.3, 2.4])

    with Volume.open(volume_path) as vol:
        scan = vol.scan(0)
        assert scan.node.how_attribute_count == 5
        assert scan.get_how("NI") == 26.4
        assert scan.get_how("task") == "VOL_A"
        assert scan.get_how("dealiased") is True
        assert scan.get_how("rpm") == 2.0
        assert isinstance(scan.get_how("rpm"), float)
        assert scan.get_how("angles") == [0.5, 1.3, 2.4]
        assert scan.get_how("wavelength", 5.3) == 5.3


def test_write_layer_data_after_reopen(volume_path):
    with Volume.create(volume_path, T0, 0.0, 0.0, 0.0) as vol:
        vol.add_scan(0.5, 3, 4, 0, 0.0, 250.0, T0, T0 + 30).add_layer("DBZH")

    data = np.arange(12, dtype=np.float32).reshape(3, 4)
    with Volume.open(volume_path, read_only=False) as vol:
        vol.scan(0).layer(0).write(data, -9999.0, -32.0)

    with Volume.open(volume_path) as vol:
        values, _, _ = vol.scan(0).layer("DBZH").read()
    np.testing.assert_array_equal(values, data)


def test_known_how_names_use_their_kind(scan):
    scan.set_how("rpm", 2)
    scan.set_how("startepochs", 1300000000.0)
    scan.set_how("system", 42)
    scan.set_how("simulated", "False")
    how = scan.node.hnd["how"]
    assert how.attrs["rpm"].dtype == np.float64
    assert how.attrs["startepochs"].dtype == np.int64
    assert how.attrs["system"] == b"42"
    assert scan.get_how("rpm") == 2.0
    assert isinstance(scan.get_how("rpm"), float)
    assert scan.get_how("startepochs") == 1300000000
    assert scan.get_how("simulated") is False
    with pytest.raises(TypeError):
        scan.set_how("dealiased", "yes")


def test_how_double_read_from_integer(scan):
    scan.node.ensure_how().attrs.create("NI", np.int32(26))
    value = scan.get_how("NI")
    assert value == 26.0
    assert isinstance(value, float)
