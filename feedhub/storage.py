"""
Feed store backed by Redis.

Each feed lives in a hash at ``feed:<id>``; the set ``feeds`` holds every
stored id and is the source of truth for membership. The set member and the
hash are written and deleted together in one MULTI/EXEC transaction. A create
WATCHes ``feed:<id>``, so of two concurrent creations of the same url only
one can commit.
"""
from contextlib import contextmanager
from typing import Optional

import redis

from feedhub.errors import AdapterFailure, Conflict, NotFound
from feedhub.logger import logger
from feedhub.models import Feed

FEEDS_KEY = 'feeds'


def feed_key(feed_id: str) -> str:
    return f'feed:{feed_id}'


def connect(url: str, socket_timeout: float = 5.0) -> redis.Redis:
    """Open the process-wide Redis client. Close it with FeedStore.close()."""
    logger.info("Connecting to Redis at %s", url)
    return redis.Redis.from_url(
        url,
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
    )


@contextmanager
def _cache_errors(operation: str):
    try:
        yield
    except redis.RedisError as e:
        logger.error("Redis %s failed: %s", operation, e, exc_info=True)
        raise AdapterFailure(f'Key-value cache unavailable during {operation}') from e


class FeedStore:
    """Create/read/delete feeds in Redis and mirror changes into the search index."""

    def __init__(self, cache: redis.Redis, search_index):
        self.cache = cache
        self.search_index = search_index

    def exists(self, feed_id: str) -> bool:
        with _cache_errors('exists'):
            return bool(self.cache.sismember(FEEDS_KEY, feed_id))

    def get(self, feed_id: str) -> Optional[Feed]:
        with _cache_errors('get'):
            record = self.cache.hgetall(feed_key(feed_id))
        if not record:
            return None
        return Feed.from_record(record)

    def get_all(self) -> list[Feed]:
        with _cache_errors('get_all'):
            ids = list(self.cache.smembers(FEEDS_KEY))
            pipe = self.cache.pipeline(transaction=False)
            for feed_id in ids:
                pipe.hgetall(feed_key(feed_id))
            records = pipe.execute()

        # A feed removed between SMEMBERS and HGETALL is skipped
        return [Feed.from_record(record) for record in records if record]

    def count(self) -> int:
        with _cache_errors('count'):
            return self.cache.scard(FEEDS_KEY)

    def put(self, feed_id: str, feed: Feed):
        """Store a new feed. Raises Conflict if the id is already taken."""
        key = feed_key(feed_id)
        with _cache_errors('put'), self.cache.pipeline() as pipe:
            try:
                pipe.watch(key)
                if pipe.sismember(FEEDS_KEY, feed_id):
                    raise Conflict(f'Feed for url {feed.url} already exists')
                pipe.multi()
                pipe.sadd(FEEDS_KEY, feed_id)
                pipe.hset(key, mapping=feed.to_record())
                pipe.execute()
            except redis.WatchError as e:
                # Another create of the same url committed first
                raise Conflict(f'Feed for url {feed.url} already exists') from e

        logger.debug("Stored feed %s (%s)", feed_id, feed.url)
        self._mirror('index', feed)

    def remove(self, feed_id: str):
        """Delete a feed. Raises NotFound if the id is not stored."""
        with _cache_errors('remove'):
            pipe = self.cache.pipeline(transaction=True)
            pipe.srem(FEEDS_KEY, feed_id)
            pipe.delete(feed_key(feed_id))
            removed, _ = pipe.execute()

        if not removed:
            raise NotFound(f'Feed {feed_id} not found')

        logger.debug("Removed feed %s", feed_id)
        self._mirror('remove', feed_id)

    def search(self, text: str) -> list[Feed]:
        """Feeds the search index matches for text. Index errors are raised."""
        ids = self.search_index.search(text)
        # The index is eventually consistent; ids no longer stored are dropped
        feeds = (self.get(feed_id) for feed_id in ids)
        return [feed for feed in feeds if feed is not None]

    def ping(self) -> bool:
        with _cache_errors('ping'):
            return bool(self.cache.ping())

    def close(self):
        self.cache.close()
        self.search_index.close()

    def _mirror(self, action: str, arg):
        # The store operation already succeeded; index errors only get logged
        try:
            getattr(self.search_index, action)(arg)
        except Exception as e:
            logger.error("Search index %s failed: %s", action, e, exc_info=True)
