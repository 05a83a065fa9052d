"""Immutable representation of a HAL resource.

A relation in ``links`` or ``embedded`` holds either exactly one item or an
ordered sequence of items. Adding to a relation never mutates a Resource, a
new one is returned instead:

    >>> r = Resource().add_link('item', {'href': '/a'})
    >>> r.get_link('item')
    {'href': '/a'}
    >>> r.add_link('item', {'href': '/b'}).get_link('item')
    ({'href': '/a'}, {'href': '/b'})
"""

import copy


class One(object):
    """A relation holding a single item"""

    __slots__ = ('item',)

    def __init__(self, item):
        self.item = item

    @property
    def first(self):
        return self.item

    def append(self, item):
        return Many((self.item, item))

    def unwrap(self):
        return self.item

    def map(self, fn):
        return One(fn(self.item))

    def export(self, fn):
        return fn(self.item)

    def __eq__(self, other):
        return isinstance(other, One) and self.item == other.item

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'One({!r})'.format(self.item)


class Many(object):
    """A relation holding an ordered sequence of items"""

    __slots__ = ('items',)

    def __init__(self, items):
        self.items = tuple(items)

    @property
    def first(self):
        return self.items[0] if self.items else None

    def append(self, item):
        return Many(self.items + (item,))

    def unwrap(self):
        return self.items

    def map(self, fn):
        return Many(fn(item) for item in self.items)

    def export(self, fn):
        return [fn(item) for item in self.items]

    def __eq__(self, other):
        return isinstance(other, Many) and self.items == other.items

    def __ne__(self, other):
        return not self == other

    def __repr__(self):
        return 'Many({!r})'.format(list(self.items))


def _shape(value, fn=lambda item: item):
    if isinstance(value, (list, tuple)):
        return Many(fn(v) for v in value)
    return One(fn(value))


def _accrete(relations, rel, item):
    updated = dict(relations)
    previous = relations.get(rel)
    updated[rel] = One(item) if previous is None else previous.append(item)
    return updated


def _items(pairs, kwargs):
    # a mapping or an iterable of (key, value) pairs, like dict() takes
    if hasattr(pairs, 'items'):
        pairs = pairs.items()
    return list(pairs or []) + list(kwargs.items())


class Resource(object):
    """Links, embedded resources and properties of one HAL document"""

    def __init__(self, links=None, embedded=None, properties=None):
        self._links = {rel: _shape(v, copy.deepcopy)
                       for rel, v in (links or {}).items()}
        self._embedded = {rel: _shape(v)
                          for rel, v in (embedded or {}).items()}
        self._properties = copy.deepcopy(dict(properties or {}))

    def _clone(self, **attrs):
        cp = copy.copy(self)
        for attr, val in attrs.items():
            setattr(cp, attr, val)
        return cp

    @property
    def links(self):
        return {rel: v.map(copy.deepcopy).unwrap()
                for rel, v in self._links.items()}

    @property
    def embedded(self):
        return {rel: v.unwrap() for rel, v in self._embedded.items()}

    @property
    def properties(self):
        return copy.deepcopy(self._properties)

    def rels(self):
        """Names of the link relations of this resource"""
        return sorted(self._links)

    def relation(self, rel):
        """The One/Many holder of a link relation, or None"""
        found = self._links.get(rel)
        return None if found is None else found.map(copy.deepcopy)

    def embedded_relation(self, rel):
        return self._embedded.get(rel)

    def embedded_rels(self):
        return sorted(self._embedded)

    def get_link(self, rel):
        found = self.relation(rel)
        return None if found is None else found.unwrap()

    def get_embedded(self, rel):
        found = self._embedded.get(rel)
        return None if found is None else found.unwrap()

    def get_property(self, key):
        return copy.deepcopy(self._properties.get(key))

    def get_href(self, rel):
        """The href of the link, or of the first link when there are many"""
        found = self._links.get(rel)
        if found is None or found.first is None:
            return None
        return found.first.get('href')

    def add_link(self, rel, link):
        return self._clone(
            _links=_accrete(self._links, rel, copy.deepcopy(link)))

    def add_links(self, links=None, **kwargs):
        resource = self
        for rel, link in _items(links, kwargs):
            resource = resource.add_link(rel, link)
        return resource

    def add_resource(self, rel, resource):
        return self._clone(_embedded=_accrete(self._embedded, rel, resource))

    def add_resources(self, resources=None, **kwargs):
        resource = self
        for rel, embedded in _items(resources, kwargs):
            resource = resource.add_resource(rel, embedded)
        return resource

    def add_property(self, key, value):
        properties = dict(self._properties)
        properties[key] = copy.deepcopy(value)
        return self._clone(_properties=properties)

    def add_properties(self, properties=None, **kwargs):
        resource = self
        for key, value in _items(properties, kwargs):
            resource = resource.add_property(key, value)
        return resource

    def __eq__(self, other):
        if not isinstance(other, Resource):
            return NotImplemented
        return (self._links == other._links
                and self._embedded == other._embedded
                and self._properties == other._properties)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return 'Resource(links={!r}, embedded={!r}, properties={!r})'.format(
            self.rels(), sorted(self._embedded), self._properties)
