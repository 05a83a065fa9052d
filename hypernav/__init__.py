"""Navigating HAL+JSON apis by following link relations"""

__version__ = '0.3.0'

from hypernav.exc import (AmbiguousNavigationError, ConfigurationError,
                          HALNavigatorError, MissingLocationError,
                          MissingRelationError, ResumeTargetError,
                          TransportError, UnexpectedlyNotJSON)
from hypernav.halnav import HALNavigator, Index, Rel, discover, resume
from hypernav.http import (Failure, HttpClient, Request, RequestsClient,
                           Response)
from hypernav.resource import Many, One, Resource
from hypernav.settings import Settings
from hypernav.traverser import HALTraverser
