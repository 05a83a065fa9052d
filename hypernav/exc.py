class HALNavigatorError(Exception):
    """Base class for every error raised while navigating an api.

    ``kind`` is a stable, machine checkable name for the failure. Everything
    needed to explain the failure is kept in ``context`` and is also
    reachable as attributes."""

    kind = 'navigation'

    def __init__(self, message, **context):
        self.message = message
        self.context = context
        super(HALNavigatorError, self).__init__(message)

    def __getattr__(self, name):
        try:
            return self.__dict__['context'][name]
        except KeyError:
            raise AttributeError(name)


class TransportError(HALNavigatorError):
    """Raised when the http exchange itself failed

    The original error is available as ``cause`` and the failure code
    reported by the client as ``code``."""

    kind = 'transport'


class UnexpectedlyNotJSON(TransportError):
    """Raised when a non-json parseable resource is gotten"""

    kind = 'not-valid-json'


class MissingRelationError(HALNavigatorError):
    '''Raised when following a link relation the resource doesn't have'''

    kind = 'missing-relation'


class ConfigurationError(HALNavigatorError):
    kind = 'configuration'


class ResumeTargetError(ConfigurationError):
    '''Raised when resuming without an absolute self link or resume_from'''

    kind = 'unresolvable-resume-target'


class MissingLocationError(ConfigurationError):
    '''Raised when following a redirect without a Location header'''

    kind = 'missing-redirect-target'


class AmbiguousNavigationError(HALNavigatorError):
    '''Raised when focusing doesn't end on exactly one embedded resource'''

    kind = 'invalid-focus'
