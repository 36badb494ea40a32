"""
Shared fixtures: scratch HDF5 files and a small polar volume.
"""
import h5py
import numpy as np
import pytest

from odimh5 import Volume

# 2011-03-13 07:06:40 UTC
T0 = 1300000000


@pytest.fixture()
def h5file(tmp_path):
    """A bare writable HDF5 file for attribute-level tests."""
    f = h5py.File(tmp_path / "attrs.h5", "w")
    yield f
    f.close()


@pytest.fixture()
def volume_path(tmp_path):
    return tmp_path / "pvol.h5"


@pytest.fixture()
def volume(volume_path):
    """A writable volume with no scans."""
    vol = Volume.create(volume_path, T0, -37.85, 144.75, 44.0, source="RAD:AU02,NOD:aumel")
    yield vol
    vol.close()


@pytest.fixture()
def scan(volume):
    """A 360 x 500 scan in a writable volume."""
    return volume.add_scan(0.5, 360, 500, 0, 0.0, 250.0, T0, T0 + 30)


@pytest.fixture()
def rng():
    return np.random.default_rng(20110313)
