"""Small helpers shared by the navigator modules"""

import re
from urllib.parse import parse_qs, unquote, urljoin, urlsplit, urlunsplit

import unidecode


def is_absolute(href):
    """Whether href carries both a scheme and a host"""
    if not href:
        return False
    parts = urlsplit(href)
    return bool(parts.scheme and parts.netloc)


def resolve_url(base, href):
    '''Resolves href against base. A missing href resolves to base itself'''
    if href is None:
        return base
    if base is None:
        return href
    return urljoin(base, href)


def split_query(href):
    """Splits href into the href without a query string and its parameters.

    Parameters given once are returned as plain values, repeated ones as
    lists."""
    parts = urlsplit(href)
    params = {k: v[0] if len(v) == 1 else v
              for k, v in parse_qs(parts.query, keep_blank_values=True).items()}
    bare = urlunsplit((parts.scheme, parts.netloc, parts.path, '',
                       parts.fragment))
    return bare, params


def merge_query(href, params=None):
    """Returns (href, params) with the query string of href moved into
    params. Parameters already in the href win over the given ones."""
    bare, own = split_query(href)
    merged = dict(params or {})
    merged.update(own)
    return bare, merged


def deep_merge(*maps):
    """Merges dictionaries left to right. Nested dictionaries are merged key
    by key, any other value replaces the previous one."""
    result = {}
    for m in maps:
        for k, v in (m or {}).items():
            if isinstance(v, dict) and isinstance(result.get(k), dict):
                result[k] = deep_merge(result[k], v)
            else:
                result[k] = v
    return result


def namify(href):
    '''Turns the host of a url into a less noisy name for display.'''
    host = urlsplit(href).netloc or href
    host = unidecode.unidecode(unquote(host))
    return re.sub(r'\W|_', ' ', host).title().replace(' ', '')


def nice_path(href):
    """Renders the path of a url as an attribute/index chain: /orders/42
    becomes .orders[42]"""

    def path_clean(chunk):
        if not chunk:
            return chunk
        if re.match(r'\d+$', chunk):
            return '[{}]'.format(chunk)
        else:
            return '.' + chunk

    path = unidecode.unidecode(unquote(urlsplit(href).path))
    return ''.join(path_clean(c) for c in path.split('/'))
