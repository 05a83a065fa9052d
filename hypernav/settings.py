"""Layered navigator configuration.

Settings are merged in order defaults -> navigator -> per call. A layer only
overrides the fields it sets; headers merge key by key.
"""

from hypernav import __version__


def default_headers():
    """Default headers for HALNavigator"""
    return {'Accept': 'application/hal+json,application/json',
            'User-Agent': 'hypernav/{}'.format(__version__)}


def new_client():
    """A client with its own requests Session, so cookies and connections
    are never shared between unrelated conversations"""
    from hypernav.http import RequestsClient
    return RequestsClient()


class Settings(object):
    """One layer of configuration. `None` means "not set in this layer"."""

    __slots__ = ('client', 'follow_redirects', 'headers', 'resume_from')

    def __init__(self, client=None, follow_redirects=None, headers=None,
                 resume_from=None):
        object.__setattr__(self, 'client', client)
        object.__setattr__(self, 'follow_redirects', follow_redirects)
        object.__setattr__(self, 'headers',
                           None if headers is None else dict(headers))
        object.__setattr__(self, 'resume_from', resume_from)

    def __setattr__(self, name, value):
        raise AttributeError('Settings are immutable, use merge()')

    @classmethod
    def from_mapping(cls, mapping):
        """Builds Settings from a mapping with the keys `client`,
        `followRedirects`, `http` (holding `headers`) and `resumeFrom`.
        snake_case spellings and a top level `headers` are accepted too."""
        http = mapping.get('http') or {}
        headers = http.get('headers', mapping.get('headers'))
        follow = mapping.get('followRedirects',
                             mapping.get('follow_redirects'))
        resume_from = mapping.get('resumeFrom', mapping.get('resume_from'))
        return cls(client=mapping.get('client'),
                   follow_redirects=follow,
                   headers=headers,
                   resume_from=resume_from)

    @classmethod
    def coerce(cls, value):
        if value is None:
            return cls()
        if isinstance(value, Settings):
            return value
        return cls.from_mapping(value)

    def merge(self, other):
        """Returns a new Settings with every field `other` sets on top"""
        other = Settings.coerce(other)
        if self.headers is None and other.headers is None:
            headers = None
        else:
            headers = dict(self.headers or {})
            headers.update(other.headers or {})

        def pick(name):
            value = getattr(other, name)
            return getattr(self, name) if value is None else value

        return Settings(client=pick('client'),
                        follow_redirects=pick('follow_redirects'),
                        headers=headers,
                        resume_from=pick('resume_from'))

    def with_header(self, key, value):
        return self.merge(Settings(headers={key: value}))

    def with_client(self):
        """Returns these settings, with a new client if none is set"""
        if self.client is not None:
            return self
        return self.merge(Settings(client=new_client()))

    def _fields(self):
        return tuple(getattr(self, name) for name in self.__slots__)

    def __eq__(self, other):
        if not isinstance(other, Settings):
            return NotImplemented
        return self._fields() == other._fields()

    def __ne__(self, other):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = None

    def __repr__(self):
        return 'Settings({})'.format(', '.join(
            '{}={!r}'.format(name, getattr(self, name))
            for name in self.__slots__ if getattr(self, name) is not None))


DEFAULTS = Settings(follow_redirects=True, headers=default_headers())


def effective(*layers):
    """Merges the layers over DEFAULTS. Without a client in any layer a new
    one is made for this call only."""
    result = DEFAULTS
    for layer in layers:
        result = result.merge(layer)
    return result.with_client()
