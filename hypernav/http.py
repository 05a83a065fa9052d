"""The http exchange used by navigators.

A client takes a Request and returns either a Response or a Failure. It never
raises for transport problems; the navigator decides what a Failure means.
"""

import abc
import json
import logging
from collections import namedtuple

import cachecontrol
import requests
from requests.structures import CaseInsensitiveDict

logger = logging.getLogger(__name__)

REQUEST_FAILED = 'request-failed'
NOT_VALID_JSON = 'not-valid-json'
HTTP_ERROR = 'http-error'


class Request(namedtuple('Request',
                         ['method', 'url', 'headers', 'params', 'body'])):

    def __new__(cls, method, url, headers=None, params=None, body=None):
        return super(Request, cls).__new__(
            cls, method.upper(), url, dict(headers or {}), dict(params or {}),
            body)


class Response(namedtuple('Response', ['status', 'headers', 'body', 'url'])):
    """The outcome of an exchange. `body` is the decoded json document."""

    def __new__(cls, status, headers=None, body=None, url=None):
        return super(Response, cls).__new__(
            cls, status, CaseInsensitiveDict(headers or {}), body, url)

    @classmethod
    def empty(cls):
        """Marker for a navigator no exchange has happened for yet"""
        return cls(None)

    @property
    def ok(self):
        return self.status is not None and 200 <= self.status < 300


Failure = namedtuple('Failure', ['code', 'cause', 'response'],
                     defaults=(None,))


class HttpClient(abc.ABC):

    @abc.abstractmethod
    def exchange(self, request):
        """Performs one http exchange. Returns a Response or a Failure."""


class RequestsClient(HttpClient):
    """HttpClient on top of a requests Session

    `cache` may be True or a CacheControlAdapter to cache responses honoring
    the usual http caching headers. Redirects are never followed here, that
    is up to the navigator."""

    def __init__(self, session=None, auth=None, cache=False, timeout=None,
                 raise_for_status=False):
        self.session = session or requests.Session()
        if cache:
            if isinstance(cache, cachecontrol.CacheControlAdapter):
                cc = cache
            else:
                cc = cachecontrol.CacheControlAdapter()
            self.session.mount('http://', cc)
            self.session.mount('https://', cc)
        if auth is not None:
            self.session.auth = auth
        self.timeout = timeout
        self.raise_for_status = raise_for_status

    @staticmethod
    def encode_body(body, headers):
        if isinstance(body, (dict, list)):
            headers.setdefault('Content-Type', 'application/json')
            return json.dumps(body, separators=(',', ':'))
        return body

    def exchange(self, request):
        headers = dict(request.headers)
        data = self.encode_body(request.body, headers)
        try:
            response = self.session.request(
                request.method,
                request.url,
                params=request.params,
                data=data,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=False)
        except requests.RequestException as e:
            logger.debug('%s %s failed: %s', request.method, request.url, e)
            return Failure(REQUEST_FAILED, e)

        logger.debug('%s %s -> %s', request.method, request.url,
                     response.status_code)
        result = Response(response.status_code, response.headers, None,
                          response.url or request.url)
        if self.raise_for_status and not response.ok:
            return Failure(HTTP_ERROR, response.text, result)
        if not response.content:
            return result
        try:
            body = response.json()
        except ValueError as e:
            return Failure(NOT_VALID_JSON, e, result)
        return result._replace(body=body)
