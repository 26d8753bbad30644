from flask import Blueprint, g, jsonify, request

from feedhub.auth import can_delete, login_required
from feedhub.errors import Forbidden, NotFound, ValidationError
from feedhub.logger import logger
from feedhub.models import Feed

feeds_bp = Blueprint('feeds', __name__)


def _feed_list_response(feeds):
    response = jsonify([feed.to_json() for feed in feeds])
    response.headers['X-Total-Count'] = str(len(feeds))
    return response


def _get_feed_or_404(feed_id: str) -> Feed:
    feed = Feed.by_id(feed_id)
    if feed is None:
        raise NotFound(f'Feed {feed_id} not found')
    return feed


@feeds_bp.route('/feeds', methods=['GET'])
def list_feeds():
    return _feed_list_response(Feed.all())


@feeds_bp.route('/feeds/search', methods=['GET'])
def search_feeds():
    text = request.args.get('text', default='', type=str).strip()
    if not text:
        raise ValidationError('Missing search text')

    return _feed_list_response(Feed.search(text))


@feeds_bp.route('/feeds/<feed_id>', methods=['GET'])
def get_feed(feed_id):
    return jsonify(_get_feed_or_404(feed_id).to_json())


@feeds_bp.route('/feeds', methods=['POST'])
@login_required
def create_feed():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    logger.info("Received POST /feeds from %s with data: %s", g.user.id, data)

    # Only admins may create feeds on behalf of someone else
    if not g.user.is_admin or not data.get('user'):
        data = {**data, 'user': g.user.id}

    feed = Feed.create(data)
    logger.info("Feed created: %s (%s)", feed.id, feed.url)
    return jsonify(feed.to_json()), 201


@feeds_bp.route('/feeds/<feed_id>', methods=['DELETE'])
@login_required
def delete_feed(feed_id):
    feed = _get_feed_or_404(feed_id)
    if not can_delete(g.user, feed):
        raise Forbidden(f'User {g.user.id} may not delete feed {feed_id}')

    Feed.delete(feed_id)
    logger.info("Feed %s deleted by %s", feed_id, g.user.id)
    return '', 204
