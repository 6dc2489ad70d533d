"""UI feature widgets used by the player screen."""

from .album_cover import AlbumCoverFeature
from .range_slider import RangeSliderWidget

__all__ = [
    "AlbumCoverFeature",
    "RangeSliderWidget",
]
