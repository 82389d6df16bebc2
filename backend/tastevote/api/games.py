from flask import Blueprint, jsonify, request, current_app
from tastevote import registry, yelp
from tastevote.exceptions import EmptyCandidateList, ProviderError


games = Blueprint('games', __name__)


@games.route('/create', methods=['POST'])
def create_game():
    """
    Searches for restaurants near the given location and opens a lobby
    seeded with them. Responds with the join code players connect with.
    """
    data = request.get_json(silent=True) or {}
    search_text = data.get('search_text')
    latitude = data.get('latitude')
    longitude = data.get('longitude')
    if latitude is None or longitude is None:
        return jsonify({'error': 'latitude and longitude are required'}), 400

    try:
        candidates = yelp.search(search_text, latitude, longitude)
    except ProviderError as exc:
        current_app.logger.warning(f"[create] provider failure: {exc}")
        return jsonify({'error': str(exc)}), 502

    try:
        join_code = registry.create(candidates)
    except EmptyCandidateList:
        return jsonify({'error': 'No restaurants found for that search'}), 404

    current_app.logger.info(f"[create] session={join_code} candidates={len(candidates)} term={search_text!r}")
    return jsonify({
        'message': 'New game created!',
        'join_code': join_code
    }), 201


@games.route('/<string:join_code>', methods=['GET'])
def check_game(join_code):
    """Pre-flight check clients run before opening a socket."""
    session = registry.get(join_code)
    if session is None:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify({
        'join_code': session.join_code,
        'status': session.status.value,
        'num_players': session.num_players,
    }), 200
