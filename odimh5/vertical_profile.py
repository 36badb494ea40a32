"""
vertical_profile.py
-------------------
Vertical profile file (what/object = VP) holding profiles dataset1..N.
"""
from .constants import OT_VERTICAL_PROFILE
from .profile import Profile
from .root import RootObject


class VerticalProfile(RootObject):
    """A vertical profile file. Use as a context manager or call close()."""

    object_type = OT_VERTICAL_PROFILE

    @classmethod
    def create(cls, path, valid_time, latitude: float, longitude: float, height: float, source=None):
        return cls._create(path, valid_time, latitude, longitude, height, source)

    @classmethod
    def open(cls, path, read_only: bool = True):
        return cls._open(path, read_only)

    def __repr__(self):
        return f"<VerticalProfile {self.path} profiles={self._dataset_count}>"

    def profile_count(self) -> int:
        return self._dataset_count

    def profile(self, i: int, levels=None) -> Profile:
        if not 0 <= i < self._dataset_count:
            raise IndexError(f"profile index {i} out of range ({self._dataset_count} profiles)")
        return Profile.open(self.node, i + 1, levels)

    def profiles(self):
        for i in range(self._dataset_count):
            yield self.profile(i)

    def add_profile(self, levels: int, start_time, end_time,
                    interval=None, min_height=None, max_height=None) -> Profile:
        profile = Profile.create(
            self.node, self._dataset_count + 1, levels, start_time, end_time,
            interval=interval, min_height=min_height, max_height=max_height)
        self._dataset_count += 1
        return profile
