from flask import Blueprint, jsonify, request
from tastevote import yelp
from tastevote.exceptions import ProviderError

search = Blueprint('search', __name__)


@search.route('/autocomplete', methods=['GET'])
def autocomplete():
    keyword = request.args.get('keyword')
    if not keyword:
        return jsonify({'error': 'keyword is required'}), 400
    try:
        return jsonify(yelp.autocomplete(keyword))
    except ProviderError as exc:
        return jsonify({'error': str(exc)}), 502


@search.route('/reviews', methods=['GET'])
def reviews():
    business_id = request.args.get('id')
    if not business_id:
        return jsonify({'error': 'id is required'}), 400
    try:
        return jsonify(yelp.reviews(business_id))
    except ProviderError as exc:
        return jsonify({'error': str(exc)}), 502
