"""Slide sequencing for a capsule presentation.

A presentation is always one title slide, one slide per media file in the
order the caller arranged them, and one closing slide.
"""

import enum
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

from .media import MediaFile

DEFAULT_DELIVERY_DATE = "Today"


class SlideType(str, enum.Enum):
    TITLE = 'title'
    IMAGE = 'image'
    VIDEO = 'video'
    AUDIO = 'audio'
    CLOSING = 'closing'


@dataclass(frozen=True)
class TitleSlide:
    title: str
    message: str

    @property
    def type(self) -> SlideType:
        return SlideType.TITLE


@dataclass(frozen=True)
class MediaSlide:
    media: MediaFile

    @property
    def type(self) -> SlideType:
        return SlideType(self.media.type.value)


@dataclass(frozen=True)
class ClosingSlide:
    sender_name: str
    delivery_date: str = DEFAULT_DELIVERY_DATE

    @property
    def type(self) -> SlideType:
        return SlideType.CLOSING

    @property
    def sender_line(self) -> str:
        return f"From: {self.sender_name}"

    @property
    def delivery_line(self) -> str:
        return f"Delivered: {self.delivery_date}"


Slide = Union[TitleSlide, MediaSlide, ClosingSlide]


def build_slides(title: str, message: str, sender_name: str,
                 media_files: Sequence[MediaFile],
                 delivery_date: Optional[str] = DEFAULT_DELIVERY_DATE) -> List[Slide]:
    """Build the ordered slide list for a capsule"""
    slides: List[Slide] = [TitleSlide(title=title, message=message)]
    slides.extend(MediaSlide(media=media) for media in media_files)
    slides.append(ClosingSlide(sender_name=sender_name,
                               delivery_date=delivery_date or DEFAULT_DELIVERY_DATE))
    return slides
