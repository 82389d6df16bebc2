import httpx
import pytest

from tastevote import yelp
from tastevote.exceptions import ProviderError


def test_search_returns_candidates_in_order(flask_app):
    found = yelp.search('two', 40.0, -83.0)
    assert [c.id for c in found] == ['a', 'b']
    assert found[0].name == 'Pizza Hut'


def test_search_without_term_omits_it(flask_app, fake_yelp):
    yelp.search(None, 40.0, -83.0, limit=3)
    params = fake_yelp.requests[-1].url.params
    assert 'term' not in params
    assert params['limit'] == '3'


def test_business_detail(flask_app):
    detail = yelp.business('c')
    assert detail['name'] == 'Taco Bell'
    assert detail['photos'] == ['http://img/c']


def test_http_errors_become_provider_errors(flask_app, fake_yelp):
    with pytest.raises(ProviderError):
        yelp.business('zzz')
    fake_yelp.fail = True
    with pytest.raises(ProviderError):
        yelp.search('tacos', 40.0, -83.0)


def test_transport_errors_become_provider_errors(flask_app):
    def refuse(request):
        raise httpx.ConnectError('connection refused', request=request)

    flask_app.config['YELP_HTTP_TRANSPORT'] = httpx.MockTransport(refuse)
    yelp.init_app(flask_app)
    with pytest.raises(ProviderError):
        yelp.autocomplete('pi')


def test_search_cli(flask_app):
    runner = flask_app.test_cli_runner()
    result = runner.invoke(args=['search', '--term', 'two', '--latitude', '40', '--longitude=-83'])
    assert result.exit_code == 0
    assert 'Pizza Hut (a)' in result.output
    assert 'Burger King (b)' in result.output

    result = runner.invoke(args=['search', '--term', 'none', '--latitude', '40', '--longitude=-83'])
    assert 'No restaurants found.' in result.output
