"""A library to allow navigating HAL apis easily.

Navigators are immutable: every request returns a new HALNavigator and the
one it was made from stays valid, so traversals can be branched and retried
freely.
"""

import copy
import logging

from hypernav import haljson, links, utils
from hypernav.exc import (AmbiguousNavigationError, MissingLocationError,
                          ResumeTargetError, TransportError,
                          UnexpectedlyNotJSON)
from hypernav.http import NOT_VALID_JSON, Failure, Request, Response
from hypernav.resource import Resource
from hypernav.settings import Settings, effective

logger = logging.getLogger(__name__)

CREATED = 201


class Rel(object):
    """Focus key selecting an embedded relation"""

    __slots__ = ('name',)

    def __init__(self, name):
        self.name = name

    def select(self, value):
        if isinstance(value, Resource):
            return value.get_embedded(self.name)
        return None

    def __repr__(self):
        return 'Rel({!r})'.format(self.name)


class Index(object):
    """Focus key selecting one element of a sequence of embedded resources"""

    __slots__ = ('position',)

    def __init__(self, position):
        self.position = position

    def select(self, value):
        if not isinstance(value, tuple):
            return None
        if -len(value) <= self.position < len(value):
            return value[self.position]
        return None

    def __repr__(self):
        return 'Index({!r})'.format(self.position)


def _focus_path(key_or_keys):
    keys = key_or_keys if isinstance(key_or_keys, (list, tuple)) \
        else [key_or_keys]
    path = []
    for key in keys:
        if isinstance(key, str):
            key = Rel(key)
        elif isinstance(key, int) and not isinstance(key, bool):
            key = Index(key)
        if not isinstance(key, (Rel, Index)):
            raise AmbiguousNavigationError(
                'Focus keys must be relation names, indices, Rel or Index, '
                'not {!r}'.format(key),
                result=None,
                path=keys,
                resource=None)
        path.append(key)
    return path


class HALNavigator(object):
    """The main navigation entity"""

    def __init__(self, href, settings=None, response=None, resource=None):
        self._href = href
        self._settings = Settings.coerce(settings)
        self._response = Response.empty() if response is None else response
        self._resource = Resource() if resource is None else resource

    @classmethod
    def discover(cls, href, settings=None):
        """Starts a conversation with an api from its discovery endpoint"""
        settings = Settings.coerce(settings).with_client()
        return cls(href, settings)._exchange('GET', href)

    @classmethod
    def resume(cls, resource, settings=None):
        """Resumes a conversation from a previously fetched resource.

        The resource needs an absolute self link, unless the absolute url of
        the resource is given as `resume_from` in the settings."""
        settings = Settings.coerce(settings).with_client()
        self_link = resource.get_href('self')
        if settings.resume_from is not None:
            href = settings.resume_from
        elif utils.is_absolute(self_link):
            href = self_link
        else:
            raise ResumeTargetError(
                'No resume_from setting, and self link not absolute: '
                '{!r}'.format(self_link),
                self_link=self_link)
        return cls(href, settings, Response.empty(), resource)

    @property
    def href(self):
        return self._href

    location = href

    @property
    def settings(self):
        return self._settings

    @property
    def response(self):
        return self._response

    @property
    def resource(self):
        return self._resource

    @property
    def status(self):
        return self._response.status

    @property
    def links(self):
        return self._resource.links

    @property
    def embedded(self):
        return self._resource.embedded

    @property
    def properties(self):
        return self._resource.properties

    def get_header(self, name):
        """Retrieves a header from the last response"""
        return self._response.headers.get(name)

    def _clone(self, **attrs):
        cp = copy.copy(self)
        for attr, val in attrs.items():
            setattr(cp, '_' + attr, val)
        return cp

    def set_header(self, key, value):
        """Returns a navigator sending the header with every later request"""
        return self._clone(settings=self._settings.with_header(key, value))

    def _exchange(self, method, url, params=None, body=None, headers=None,
                  settings=None):
        call_settings = effective(self._settings, settings)
        request_headers = dict(call_settings.headers)
        request_headers.update(headers or {})
        request = Request(method, url, request_headers, params, body)

        result = call_settings.client.exchange(request)
        if isinstance(result, Failure):
            error = UnexpectedlyNotJSON if result.code == NOT_VALID_JSON \
                else TransportError
            raise error(
                '{} {} failed ({}): {}'.format(method, url, result.code,
                                               result.cause),
                code=result.code,
                cause=result.cause,
                request=request,
                response=result.response)

        return type(self)(result.url or url, self._settings, result,
                          haljson.from_hal(result.body))

    def _follow(self, method, rel, params=None, body=None, headers=None,
                settings=None):
        resolved = links.resolve_link(self._resource, rel, params,
                                      response=self._response)
        url = utils.resolve_url(self._href, resolved.href)
        return self._exchange(method, url, resolved.params, body, headers,
                              settings)

    def head(self, rel, params=None, headers=None, settings=None):
        """Performs a HEAD request against a link"""
        return self._follow('HEAD', rel, params, headers=headers,
                            settings=settings)

    def get(self, rel, params=None, headers=None, settings=None):
        """Fetches the resource a link points at"""
        return self._follow('GET', rel, params, headers=headers,
                            settings=settings)

    def delete(self, rel, params=None, headers=None, settings=None):
        return self._follow('DELETE', rel, params, headers=headers,
                            settings=settings)

    def _write(self, method, rel, params, body, headers, settings):
        result = self._follow(method, rel, params, body, headers, settings)
        location = result.get_header('Location')
        if (result.status == CREATED and location is not None
                and effective(self._settings, settings).follow_redirects):
            target = utils.resolve_url(result.href, location)
            logger.debug('%s %s created %s, following', method, result.href,
                         target)
            return result._exchange('GET', target, settings=settings)
        return result

    def post(self, rel, body=None, params=None, headers=None, settings=None):
        """Posts `body` to a link.

        `body` may be a string or a dictionary, which is serialized as json.
        A 201 Created response is followed to its Location unless
        follow_redirects is turned off."""
        return self._write('POST', rel, params, body, headers, settings)

    create = post

    def put(self, rel, body=None, params=None, headers=None, settings=None):
        return self._write('PUT', rel, params, body, headers, settings)

    def patch(self, rel, body=None, params=None, headers=None, settings=None):
        return self._write('PATCH', rel, params, body, headers, settings)

    def follow_redirect(self, headers=None, settings=None):
        """Fetches the url in the Location header of the last response"""
        location = self.get_header('Location')
        if location is None:
            raise MissingLocationError(
                'Attempting to follow a redirect without a location header',
                headers=dict(self._response.headers),
                response=self._response)
        return self._exchange('GET', utils.resolve_url(self._href, location),
                              headers=headers, settings=settings)

    def focus(self, key_or_keys):
        """Focuses on an embedded resource without any request.

        Takes a relation name, or a path of Rel and Index keys. The result
        must be exactly one resource. The focused navigator only keeps its
        own location from the settings of this one."""
        path = _focus_path(key_or_keys)
        focused = self._resource
        for key in path:
            focused = key.select(focused)

        if not isinstance(focused, Resource):
            raise AmbiguousNavigationError(
                'Focusing must result in a single resource, resulted in '
                '{}'.format(type(focused).__name__),
                result=focused,
                path=path,
                resource=self._resource)

        resume_from = utils.resolve_url(self._href, focused.get_href('self'))
        logger.debug('focused %r on %s', path, resume_from)
        return type(self)(resume_from, Settings(resume_from=resume_from),
                          Response.empty(), focused)

    def __eq__(self, other):
        if not isinstance(other, HALNavigator):
            return NotImplemented
        return (self._href == other._href
                and self._settings == other._settings
                and self._response == other._response
                and self._resource == other._resource)

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        if self._href is None:
            return '{cls}()'.format(cls=type(self).__name__)
        return "{cls}({name}{path})".format(
            cls=type(self).__name__,
            name=utils.namify(self._href),
            path=utils.nice_path(self._href))


def discover(href, settings=None):
    return HALNavigator.discover(href, settings)


def resume(resource, settings=None):
    return HALNavigator.resume(resource, settings)
