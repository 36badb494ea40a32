"""
volume.py
---------
Polar volume file (what/object = PVOL) holding scans dataset1..N.
"""
import logging

from .constants import OT_VOLUME_POLAR
from .root import RootObject
from .scan import Scan

logger = logging.getLogger(__name__)


class Volume(RootObject):
    """A polar volume file. Use as a context manager or call close()."""

    object_type = OT_VOLUME_POLAR

    @classmethod
    def create(cls, path, valid_time, latitude: float, longitude: float, height: float, source=None):
        """Create a new file; fails if ``path`` already exists."""
        return cls._create(path, valid_time, latitude, longitude, height, source)

    @classmethod
    def open(cls, path, read_only: bool = True):
        vol = cls._open(path, read_only)
        logger.debug("%s: %d scans", path, vol.scan_count())
        return vol

    def __repr__(self):
        return f"<Volume {self.path} scans={self._dataset_count}>"

    def scan_count(self) -> int:
        return self._dataset_count

    def scan(self, i: int) -> Scan:
        """Open the i'th scan (0 based, i.e. dataset<i+1>)."""
        if not 0 <= i < self._dataset_count:
            raise IndexError(f"scan index {i} out of range ({self._dataset_count} scans)")
        return Scan.open(self.node, i + 1)

    def scans(self):
        for i in range(self._dataset_count):
            yield self.scan(i)

    def add_scan(self, elevation: float, azimuth_count: int, range_bin_count: int,
                 first_azimuth: int, range_start: float, range_scale: float,
                 start_time, end_time) -> Scan:
        scan = Scan.create(
            self.node, self._dataset_count + 1, elevation, azimuth_count,
            range_bin_count, first_azimuth, range_start, range_scale,
            start_time, end_time)
        self._dataset_count += 1
        return scan
