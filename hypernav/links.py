"""Turns a link relation of a resource into a concrete request target"""

from collections import namedtuple

import uritemplate

from hypernav import utils
from hypernav.exc import MissingRelationError

ResolvedLink = namedtuple('ResolvedLink', ['href', 'params'])


def expand(href, params):
    """Expands a templated href. Returns the expanded href and the params
    the template didn't consume."""
    variables = uritemplate.variables(href)
    # uritemplate expands 0's to empty string
    values = {k: '0' if v == 0 else v
              for k, v in params.items() if k in variables}
    remaining = {k: v for k, v in params.items() if k not in variables}
    return uritemplate.expand(href, values), remaining


def template_variables(resource, rel):
    """Names of the uri template variables of a link, empty when the link
    is missing or not templated"""
    holder = resource.relation(rel)
    link = None if holder is None else holder.first
    if not link or not link.get('templated') or link.get('href') is None:
        return set()
    return set(uritemplate.variables(link['href']))


def resolve_link(resource, rel, params=None, response=None):
    """Resolves `rel` of `resource` to a ResolvedLink.

    Parameters already present in the link's query string take precedence
    over the given ones. Raises MissingRelationError if the resource has no
    such link."""
    holder = resource.relation(rel)
    link = None if holder is None else holder.first
    href = None if link is None else link.get('href')
    if href is None:
        if holder is None:
            reason = 'Attempting to follow a link which does not exist'
        else:
            reason = 'Attempting to follow a link which has no href'
        raise MissingRelationError(
            '{}: {!r} (available: {})'.format(
                reason, rel, ', '.join(resource.rels()) or 'none'),
            rel=rel,
            available_rels=resource.rels(),
            resource=resource,
            response=response)

    params = dict(params or {})
    if link.get('templated'):
        href, params = expand(href, params)
    return ResolvedLink(*utils.merge_query(href, params))
