"""Tag family resources (AprilTag families and ArUco dictionaries).

Families are provided by OpenCV's aruco module. Unknown names resolve to a
deterministic fallback family, so that a board can still be previewed.
"""
import asyncio
import logging
from dataclasses import dataclass, field

import cv2
import numpy as np


_logger = logging.getLogger('calibtarget.families')

# Maps the AprilTag family names to OpenCV's predefined dictionaries
APRILTAG_FAMILIES = {
    'tag16h5': 'DICT_APRILTAG_16h5',
    'tag25h9': 'DICT_APRILTAG_25h9',
    'tag36h10': 'DICT_APRILTAG_36h10',
    'tag36h11': 'DICT_APRILTAG_36h11',
}

FALLBACK_MARKER_SIZE = 6
FALLBACK_NUM_MARKERS = 1000

__FAMILY_CACHE = dict()


@dataclass(frozen=True)
class TagFamily:
    """A set of markers, each consisting of `marker_size` x `marker_size`
    data modules."""
    name: str
    marker_size: int
    num_markers: int
    fallback: bool = False
    dictionary: object = field(default=None, repr=False, compare=False)

    def modules(self, marker_id: int, border_bits: int = 1) -> np.ndarray:
        """Returns the marker with the given id as uint8 array, holding one
        element per module (0 black, 255 white), including the black border.

        Ids exceeding the family size wrap around.
        """
        marker_id %= self.num_markers
        side = self.marker_size + 2 * border_bits
        if self.dictionary is not None:
            return cv2.aruco.generateImageMarker(self.dictionary, marker_id, side, borderBits=border_bits)
        # Fallback markers are seeded by their id (stable across runs)
        rng = np.random.default_rng(marker_id)
        marker = np.zeros((side, side), dtype=np.uint8)
        marker[border_bits:side - border_bits, border_bits:side - border_bits] = \
            255 * rng.integers(0, 2, size=(self.marker_size, self.marker_size), dtype=np.uint8)
        return marker


def _opencv_dictionary_name(name: str):
    if name in APRILTAG_FAMILIES:
        return APRILTAG_FAMILIES[name]
    if name.startswith('DICT_'):
        return name
    return None


def get_family(name: str) -> TagFamily:
    """Returns the (cached) tag family, see :func:`load_family`."""
    global __FAMILY_CACHE
    if name in __FAMILY_CACHE:
        return __FAMILY_CACHE[name]
    attr = _opencv_dictionary_name(name)
    if attr is None or not hasattr(cv2.aruco, attr):
        _logger.warning(f'Tag family `{name}` is not available, using the fallback family instead.')
        family = TagFamily(name=name, marker_size=FALLBACK_MARKER_SIZE,
                           num_markers=FALLBACK_NUM_MARKERS, fallback=True)
    else:
        dictionary = cv2.aruco.getPredefinedDictionary(getattr(cv2.aruco, attr))
        family = TagFamily(name=name, marker_size=int(dictionary.markerSize),
                           num_markers=int(dictionary.bytesList.shape[0]),
                           dictionary=dictionary)
        _logger.info(f'Loaded tag family `{name}`: {family.num_markers} markers, {family.marker_size}x{family.marker_size} bits')
    __FAMILY_CACHE[name] = family
    return family


async def load_family(name: str) -> TagFamily:
    """Loads the tag family without blocking the event loop.

    Unknown family names yield a fallback family (flagged via
    `TagFamily.fallback`).
    """
    if name in __FAMILY_CACHE:
        return __FAMILY_CACHE[name]
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, get_family, name)


def clear_cache() -> None:
    """Drops all loaded families (used to simplify testing)."""
    __FAMILY_CACHE.clear()
