"""Full-screen time capsule slideshow player"""

from .media import BackgroundMusic, MediaFile, MediaType
from .session import PlayerSession
from .slides import ClosingSlide, MediaSlide, SlideType, TitleSlide, build_slides
from .transitions import TransitionSpec, get_transition_variants

__version__ = '0.1.0'

__all__ = [
    'BackgroundMusic',
    'ClosingSlide',
    'MediaFile',
    'MediaSlide',
    'MediaType',
    'PlayerSession',
    'SlideType',
    'TitleSlide',
    'TransitionSpec',
    'build_slides',
    'get_transition_variants',
]
