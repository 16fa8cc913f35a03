from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Tag:
    """Named, ID-bearing catalog entity listed on the homepage."""
    name: str
    id: int


@dataclass(frozen=True)
class Artist(Tag):
    """Artist tag (``m_artist`` listing)."""


@dataclass(frozen=True)
class Genre(Tag):
    """Genre tag (``m_style`` listing)."""


@dataclass(frozen=True)
class Album:
    """Album record assembled from one node of an AJAX album fragment."""
    id: int
    title: str
    url: Optional[str]  # None when the site marks the download as broken
    cover: str
    genres: Tuple[int, ...] = ()
    artists: Tuple[int, ...] = ()

    @property
    def is_broken(self) -> bool:
        return self.url is None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['genres'] = list(self.genres)
        data['artists'] = list(self.artists)
        return data


class ChangeType(str, Enum):
    EDIT = 'edit'
    BROKEN = 'broken'


@dataclass(frozen=True)
class Change:
    """Latest status reported for an album in the homepage comment feed."""
    album_id: int
    type: ChangeType

    def to_dict(self) -> Dict[str, Any]:
        return {'album_id': self.album_id, 'type': self.type.value}
