import pytest

from hypernav import links
from hypernav.exc import HALNavigatorError, MissingRelationError
from hypernav.resource import Resource


@pytest.fixture
def resource():
    return Resource().add_links({
        'self': {'href': '/orders'},
        'open': {'href': '/orders?status=open'},
        'find': {'href': '/orders{?page,size}', 'templated': True},
        'order': {'href': '/orders/{id}', 'templated': True},
    })


def test_plain_link(resource):
    assert links.resolve_link(resource, 'self') == ('/orders', {})


def test_params_go_to_query(resource):
    resolved = links.resolve_link(resource, 'self', {'page': 2})
    assert resolved.href == '/orders'
    assert resolved.params == {'page': 2}


def test_link_params_win(resource):
    resolved = links.resolve_link(resource, 'open',
                                  {'status': 'closed', 'page': 1})
    assert resolved.href == '/orders'
    assert resolved.params == {'status': 'open', 'page': 1}


def test_templated_link(resource):
    resolved = links.resolve_link(resource, 'order', {'id': 42, 'fields': 'a'})
    assert resolved.href == '/orders/42'
    assert resolved.params == {'fields': 'a'}


def test_templated_query(resource):
    resolved = links.resolve_link(resource, 'find', {'page': 0})
    assert resolved.href == '/orders'
    assert resolved.params == {'page': '0'}


def test_missing_relation(resource):
    with pytest.raises(MissingRelationError) as excinfo:
        links.resolve_link(resource, 'customer')
    err = excinfo.value
    assert isinstance(err, HALNavigatorError)
    assert err.kind == 'missing-relation'
    assert err.rel == 'customer'
    assert err.available_rels == ['find', 'open', 'order', 'self']


def test_missing_relation_on_empty_resource():
    with pytest.raises(MissingRelationError) as excinfo:
        links.resolve_link(Resource(), 'next')
    assert excinfo.value.available_rels == []


def test_resolution_is_deterministic(resource):
    results = {links.resolve_link(resource, 'order', {'id': 1}).href
               for _ in range(3)}
    assert results == {'/orders/1'}


def test_relation_without_href():
    r = Resource().add_link('draft', {'title': 'not yet published'})
    with pytest.raises(MissingRelationError) as excinfo:
        links.resolve_link(r, 'draft')
    assert 'has no href' in str(excinfo.value)
    assert 'does not exist' not in str(excinfo.value)
    assert excinfo.value.rel == 'draft'


def test_unknown_relation_message(resource):
    with pytest.raises(MissingRelationError) as excinfo:
        links.resolve_link(resource, 'customer')
    assert 'does not exist' in str(excinfo.value)
