from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from feedhub import config, search, storage
from feedhub.errors import FeedError
from feedhub.logger import logger
from feedhub.models import bind_store, get_store
from feedhub.routes import feeds_bp


def create_app(overrides=None, cache=None, search_index=None):
    """
    Build the feed service.

    cache and search_index may be injected (tests hand in fakes); otherwise
    they are connected from REDIS_URL and ELASTIC_URL.
    """
    app = Flask(__name__)
    app.config.from_object(config)
    if overrides:
        app.config.update(overrides)

    if cache is None:
        cache = storage.connect(app.config['REDIS_URL'], app.config['REDIS_SOCKET_TIMEOUT'])
    if search_index is None:
        search_index = search.connect(
            app.config['ELASTIC_URL'],
            index=app.config['ELASTIC_INDEX'],
            timeout=app.config['ELASTIC_TIMEOUT'],
        )

    store = storage.FeedStore(cache, search_index)
    bind_store(store)
    app.extensions['feedhub.store'] = store

    app.register_blueprint(feeds_bp)
    register_error_handlers(app)

    @app.route('/')
    def index():
        return 'Feed aggregation service. See /feeds.'

    @app.route('/health', methods=['GET'])
    def health():
        store.ping()
        return jsonify({'status': 'ok', 'feeds': store.count()})

    return app


def register_error_handlers(app):

    @app.errorhandler(FeedError)
    def handle_feed_error(e):
        if e.status_code >= 500:
            logger.error("Request failed: %s", e.message)
        return jsonify({'message': e.message}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'message': e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.error("Unhandled error: %s", e, exc_info=True)
        return jsonify({'message': 'Internal server error'}), 500


def shutdown():
    """Close the bound store's cache and search index connections."""
    try:
        store = get_store()
    except RuntimeError:
        return
    logger.info("Closing cache and search index connections")
    store.close()
