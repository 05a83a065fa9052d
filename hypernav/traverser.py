from hypernav import links, utils

VERBS = ('head', 'get', 'delete', 'post', 'put', 'patch')
WRITE_VERBS = ('post', 'put', 'patch')


class HALTraverser(object):
    """Follows a sequence of link relations from a navigator.

    The traverser is immutable, the with_* methods return a new one."""

    def __init__(self, navigator, template_parameters=None,
                 request_options=None):
        self.navigator = navigator
        self.template_parameters = dict(template_parameters or {})
        self.request_options = dict(request_options or {})

    def with_template_parameters(self, **kwargs):
        """Parameters for templated links. A step only receives the ones its
        link's template uses"""
        params = dict(self.template_parameters)
        params.update(kwargs)
        return HALTraverser(self.navigator, params, self.request_options)

    def with_request_options(self, **request_options):
        """Options for the requests made while following.

            default = {'headers': {...}, 'body': ...}
            post = {...}
            ht:user = {...}

        Options are looked up by rel name, then method name, then default.
        Anything not set for a rel or method comes from default."""
        options = utils.deep_merge(self.request_options, request_options)
        return HALTraverser(self.navigator, self.template_parameters, options)

    @staticmethod
    def _select_info_for_a_sequence(info_set, method=None, rel_name=None):
        default = info_set.get('default', {})
        found = info_set.get(rel_name) or info_set.get(method) or {}
        return utils.deep_merge(default, found)

    def _step(self, cursor, seq):
        if isinstance(seq, str):
            seq = (seq,)
        rel_name = seq[0]
        method = (seq[1] if len(seq) > 1 else 'get').lower()
        if method not in VERBS:
            raise ValueError('Unknown http method {!r} for {!r}'.format(
                method, rel_name))

        options = self._select_info_for_a_sequence(
            self.request_options, method, rel_name)
        verb = getattr(cursor, method)
        used = links.template_variables(cursor.resource, rel_name)
        params = {k: v for k, v in self.template_parameters.items()
                  if k in used}
        kwargs = dict(params=params or None,
                      headers=options.get('headers'))
        if method in WRITE_VERBS:
            kwargs['body'] = seq[2] if len(seq) > 2 else options.get('body')
        return verb(rel_name, **kwargs)

    def follow(self, *sequences):
        """
        :sequences - every step to be followed, in order.

            Each step can be
            - just a rel name
                e.g.
                    'ht:me'
            - a tuple of rel name, http method name and optionally a body
                e.g.
                    ('ht:posts', 'post', {'content': 'hello'})

            If no method is given, 'get' is used.

            Example sequences:
                    ('ht:me', 'ht:user')
                    ('ht:me', ('ht:user', 'get'), 'ht:posts')
        """
        cursor = self.navigator
        for seq in sequences:
            cursor = self._step(cursor, seq)
        return cursor
