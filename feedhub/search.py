"""
Elasticsearch mirror of the feed store.

index() and remove() never raise: a failed request is logged and reported
as False so the store operation that triggered it still succeeds.
"""
from elasticsearch import ApiError, Elasticsearch, NotFoundError, TransportError

from feedhub.errors import AdapterFailure
from feedhub.logger import logger

SEARCH_FIELDS = ["author", "url", "link"]


class SearchIndex:

    def __init__(self, client: Elasticsearch, index: str = "feeds"):
        self.client = client
        self.index_name = index

    def index(self, feed) -> bool:
        try:
            self.client.index(index=self.index_name, id=feed.id, document=feed.to_json())
        except (ApiError, TransportError) as e:
            logger.warning("Could not index feed %s: %s", feed.id, e)
            return False
        return True

    def remove(self, feed_id: str) -> bool:
        try:
            self.client.delete(index=self.index_name, id=feed_id)
        except NotFoundError:
            # Never indexed, or already gone
            return True
        except (ApiError, TransportError) as e:
            logger.warning("Could not remove feed %s from index: %s", feed_id, e)
            return False
        return True

    def search(self, text: str, limit: int = 100) -> list[str]:
        """Return the ids of feeds whose author, url or link match text."""
        try:
            results = self.client.search(
                index=self.index_name,
                query={"multi_match": {"query": text, "fields": SEARCH_FIELDS}},
                size=limit,
                source=False,
            )
            hits = results["hits"]["hits"]
        except NotFoundError:
            # Index not created yet: nothing has been mirrored
            return []
        except (ApiError, TransportError, KeyError) as e:
            logger.error("Search for %r failed: %s", text, e)
            raise AdapterFailure('Search index unavailable') from e
        return [hit["_id"] for hit in hits]

    def close(self):
        self.client.close()


class NullSearchIndex:
    """Stands in when no ELASTIC_URL is configured."""

    def index(self, feed) -> bool:
        return True

    def remove(self, feed_id: str) -> bool:
        return True

    def search(self, text: str, limit: int = 100) -> list[str]:
        return []

    def close(self):
        pass


def connect(url: str, index: str = "feeds", timeout: float = 5.0):
    if not url:
        logger.info("ELASTIC_URL not set, search indexing disabled")
        return NullSearchIndex()
    logger.info("Mirroring feeds into Elasticsearch index %s at %s", index, url)
    return SearchIndex(Elasticsearch(url, request_timeout=timeout), index=index)
