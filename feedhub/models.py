from dataclasses import dataclass
from typing import Optional

from feedhub.errors import ValidationError
from feedhub.hashing import hash_url


def _require(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'Feed.{field} cannot be empty')
    return value


def _optional(value, field: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f'Feed.{field} must be a string')
    return value


@dataclass
class Feed:
    """
    A subscribed RSS/Atom feed.

    The id is derived from the url, so two feeds with the same url always
    share an id. Persistence goes through the store bound with bind_store().
    """

    author: str
    url: str
    user: Optional[str] = None  # owning account, None for system feeds
    link: Optional[str] = None  # human-facing site url
    etag: Optional[str] = None
    last_modified: Optional[str] = None

    store = None

    def __post_init__(self):
        _require(self.author, 'author')
        _require(self.url, 'url')
        _optional(self.user, 'user')
        _optional(self.link, 'link')
        _optional(self.etag, 'etag')
        _optional(self.last_modified, 'last_modified')

    @property
    def id(self) -> str:
        return hash_url(self.url)

    def to_json(self) -> dict:
        return {
            'author': self.author,
            'url': self.url,
            'user': self.user,
            'link': self.link,
            'id': self.id,
            'etag': self.etag,
            'lastModified': self.last_modified,
        }

    def to_record(self) -> dict:
        """Fields as stored in the cache; absent values are left out."""
        record = self.to_json()
        del record['id']
        return {key: value for key, value in record.items() if value is not None}

    @classmethod
    def from_record(cls, record: dict) -> 'Feed':
        return cls(
            author=record.get('author'),
            url=record.get('url'),
            user=record.get('user'),
            link=record.get('link'),
            etag=record.get('etag'),
            last_modified=record.get('lastModified'),
        )

    def save(self) -> str:
        """Persist the feed. Raises Conflict if its url is already stored."""
        get_store().put(self.id, self)
        return self.id

    @classmethod
    def create(cls, data: dict) -> 'Feed':
        feed = cls(
            author=data.get('author'),
            url=data.get('url'),
            user=data.get('user'),
            link=data.get('link'),
        )
        feed.save()
        return feed

    @classmethod
    def by_id(cls, feed_id: str) -> Optional['Feed']:
        return get_store().get(feed_id)

    @classmethod
    def by_url(cls, url: str) -> Optional['Feed']:
        return get_store().get(hash_url(url))

    @classmethod
    def all(cls) -> list['Feed']:
        return get_store().get_all()

    @classmethod
    def search(cls, text: str) -> list['Feed']:
        return get_store().search(text)

    @classmethod
    def count(cls) -> int:
        return get_store().count()

    @classmethod
    def delete(cls, feed_id: str):
        """Remove a feed. Ownership must already have been checked by the caller."""
        get_store().remove(feed_id)


def bind_store(store):
    Feed.store = store


def get_store():
    if Feed.store is None:
        raise RuntimeError('No feed store bound; call bind_store() first')
    return Feed.store
