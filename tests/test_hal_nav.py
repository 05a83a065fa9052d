'''Navigator tests against a faked http wire'''

import json

import httpretty
import pytest

import hypernav.halnav as HN
from hypernav import haljson
from hypernav.exc import (MissingLocationError, MissingRelationError,
                          UnexpectedlyNotJSON)
from hypernav.http import RequestsClient
from hypernav.settings import Settings


def uri_of(doc):
    return doc['_links']['self']['href']


def register_hal_page(doc, **kwargs):
    httpretty.HTTPretty.register_uri(
        kwargs.pop('method', 'GET'),
        body=json.dumps(doc),
        uri=kwargs.pop('uri', None) or uri_of(doc),
        **kwargs
    )


@pytest.fixture
def http(request):
    httpretty.HTTPretty.enable(allow_net_connect=False)
    def finalizer():
        httpretty.HTTPretty.disable()
        httpretty.HTTPretty.reset()
    request.addfinalizer(finalizer)
    return httpretty.HTTPretty


@pytest.fixture
def index_uri():
    return 'http://example.com/api/'


@pytest.fixture
def settings():
    return Settings(client=RequestsClient())


@pytest.fixture
def index(index_uri, http):
    doc = {
        '_links': {
            'self': {'href': index_uri},
            'orders': {'href': '/api/orders?sort=desc'},
            'order': {'href': '/api/orders/{id}', 'templated': True},
            'create-order': {'href': '/api/orders'},
            'broken': {'href': '/api/broken'},
        },
        'version': 2,
    }
    register_hal_page(doc)
    return doc


@pytest.fixture
def order(http):
    doc = {
        '_links': {'self': {'href': 'http://example.com/orders/42'}},
        '_embedded': {
            'customer': {'_links': {'self': {'href': '/customers/7'}},
                         'name': 'Jane'},
        },
        'status': 'pending',
    }
    register_hal_page(doc)
    return doc


@pytest.fixture
def N(index, index_uri, settings):
    '''A navigator on the index page'''
    return HN.discover(index_uri, settings)


class TestDiscover:

    def test_discover(self, N, index, index_uri):
        assert N.href == index_uri
        assert N.status == 200
        assert N.resource == haljson.from_hal(index)
        assert N.properties == {'version': 2}

    def test_sends_default_headers(self, N):
        headers = httpretty.last_request().headers
        assert headers['Accept'] == 'application/hal+json,application/json'
        assert headers['User-Agent'].startswith('hypernav/')

    def test_settings_as_mapping(self, index, index_uri):
        nav = HN.discover(index_uri, {'client': RequestsClient(),
                                      'followRedirects': False})
        assert nav.settings.follow_redirects is False

    def test_repr(self, N):
        assert repr(N) == 'HALNavigator(ExampleCom.api)'

    def test_each_discovery_gets_its_own_client(self, http):
        http.register_uri('GET', 'http://a.example.com/', body='{}',
                          adding_headers={
                              'Set-Cookie': 'sid=secret; Domain=.example.com'})
        http.register_uri('GET', 'http://b.example.com/', body='{}')
        a = HN.discover('http://a.example.com/')
        b = HN.discover('http://b.example.com/')
        assert isinstance(a.settings.client, RequestsClient)
        assert a.settings.client is not b.settings.client
        assert 'Cookie' not in httpretty.last_request().headers

    def test_client_kept_along_the_conversation(self, N, order, http):
        register_hal_page(order, uri='http://example.com/api/orders/42')
        assert N.get('order', {'id': 42}).settings.client is \
            N.settings.client


class TestGet:

    def test_get_merges_link_query(self, N, http):
        register_hal_page({'_links': {'self': {'href': N.href + 'orders'}}})
        orders = N.get('orders', {'sort': 'asc', 'page': 2})
        qs = httpretty.last_request().querystring
        assert qs == {'sort': ['desc'], 'page': ['2']}
        assert orders.href.startswith('http://example.com/api/orders?')

    def test_get_templated(self, N, order, http):
        register_hal_page(order, uri='http://example.com/api/orders/42')
        nav = N.get('order', {'id': 42})
        assert httpretty.last_request().path == '/api/orders/42'
        assert nav.resource.get_property('status') == 'pending'

    def test_missing_relation(self, N):
        with pytest.raises(MissingRelationError) as excinfo:
            N.get('customers')
        assert excinfo.value.rel == 'customers'
        assert 'orders' in excinfo.value.available_rels
        assert excinfo.value.response is N.response

    def test_previous_navigator_unchanged(self, N, order, http):
        register_hal_page(order, uri='http://example.com/api/orders/42')
        before = (N.href, N.resource, N.response)
        N.get('order', {'id': 42})
        assert (N.href, N.resource, N.response) == before

    def test_repeated_reads_are_equal(self, N, order, http):
        register_hal_page(order, uri='http://example.com/api/orders/42')
        first = N.get('order', {'id': 42})
        second = N.get('order', {'id': 42})
        assert first.resource == second.resource

    def test_not_json(self, N, http):
        http.register_uri('GET', 'http://example.com/api/broken',
                          body='<html>oops</html>')
        with pytest.raises(UnexpectedlyNotJSON) as excinfo:
            N.get('broken')
        assert excinfo.value.code == 'not-valid-json'
        assert excinfo.value.response.status == 200

    def test_head(self, N, http):
        http.register_uri('HEAD', 'http://example.com/api/broken', body='',
                          adding_headers={'X-Count': '3'})
        nav = N.head('broken')
        assert nav.status == 200
        assert nav.get_header('x-count') == '3'
        assert nav.resource.rels() == []

    def test_delete(self, N, http):
        http.register_uri('DELETE', 'http://example.com/api/broken',
                          status=204, body='')
        nav = N.delete('broken')
        assert nav.status == 204
        assert httpretty.last_request().method == 'DELETE'


class TestWrite:

    @pytest.fixture
    def created(self, http):
        http.register_uri('POST', 'http://example.com/api/orders',
                          status=201, body=json.dumps({'status': 'accepted'}),
                          adding_headers={'Location': '/orders/42'})

    def test_post_follows_created(self, N, order, created):
        nav = N.post('create-order', {'item': 'book'})
        assert nav.href == 'http://example.com/orders/42'
        assert nav.status == 200
        assert nav.resource == haljson.from_hal(order)

    def test_post_sends_json(self, N, order, created):
        N.post('create-order', {'item': 'book'},
               settings=Settings(follow_redirects=False))
        request = httpretty.last_request()
        assert json.loads(request.body.decode('utf-8')) == {'item': 'book'}
        assert request.headers['Content-Type'] == 'application/json'

    def test_created_not_followed_when_disabled(self, N, order, created):
        nav = N.post('create-order', {'item': 'book'},
                     settings=Settings(follow_redirects=False))
        assert nav.status == 201
        assert nav.resource.get_property('status') == 'accepted'
        assert nav.get_header('Location') == '/orders/42'

    def test_navigator_level_setting(self, index, index_uri, order, created):
        nav = HN.discover(index_uri, Settings(client=RequestsClient(),
                                              follow_redirects=False))
        assert nav.post('create-order', {}).status == 201

    def test_put_and_patch_follow_created(self, N, order, http):
        for method in ('PUT', 'PATCH'):
            http.register_uri(method, 'http://example.com/api/orders',
                              status=201, body='',
                              adding_headers={'Location': '/orders/42'})
        assert N.put('create-order', {}).href == uri_of(order)
        assert N.patch('create-order', {}).href == uri_of(order)

    def test_other_statuses_not_followed(self, N, order, http):
        http.register_uri('POST', 'http://example.com/api/orders',
                          status=202, body='',
                          adding_headers={'Location': '/orders/42'})
        nav = N.post('create-order', {})
        assert nav.status == 202
        nav = nav.follow_redirect()
        assert nav.resource == haljson.from_hal(order)


class TestFollowRedirect:

    def test_without_location(self, N):
        with pytest.raises(MissingLocationError) as excinfo:
            N.follow_redirect()
        assert excinfo.value.kind == 'missing-redirect-target'


class TestHeaders:

    def test_set_header_persists(self, N, order, http):
        register_hal_page(order, uri='http://example.com/api/orders/42')
        authed = N.set_header('Authorization', 'Bearer abc')
        authed.get('order', {'id': 42}).get('self')
        assert httpretty.last_request().headers['Authorization'] == \
            'Bearer abc'
        assert 'Authorization' not in (N.settings.headers or {})

    def test_per_call_headers_win(self, N, order, http):
        register_hal_page(order, uri='http://example.com/api/orders/42')
        authed = N.set_header('Authorization', 'Bearer abc')
        authed.get('order', {'id': 42}, headers={'Authorization': 'other'})
        assert httpretty.last_request().headers['Authorization'] == 'other'


class TestFocus:

    def test_focus_relative_self(self, N, order, http):
        register_hal_page(order, uri='http://example.com/api/orders/42')
        nav = N.get('order', {'id': 42})
        customer = nav.focus('customer')
        assert customer.href == 'http://example.com/customers/7'
        assert customer.status is None
        assert customer.resource.get_property('name') == 'Jane'
        assert customer.settings == Settings(
            resume_from='http://example.com/customers/7')
