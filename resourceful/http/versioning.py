"""
Action Versioning
Picks the versioned controller method a request should invoke

Versioned implementations of an action follow a naming convention: the
action name, the separator, the major and the minor number.

    show        -> version 0
    show_1_2    -> version 1.2
    show_2      -> version 2.0

VersionResolver plugs two filters into the Dispatcher: resolve() infers or
validates the version once the controller is known, call() rewrites the
action right before invocation.
"""
from abc import ABC, abstractmethod
from functools import total_ordering
from typing import Any, Callable, Dict, Optional
import re

from resourceful.defaults import DEFAULT_VERSION_PARAM, DEFAULT_VERSION_SEPARATOR
from resourceful.exceptions import VersionNotFoundError
from resourceful.logging import getLogger

logger = getLogger(__name__)


@total_ordering
class Version:
    """
    A (major, minor) API version compared numerically

    Usage:
        Version.parse('1.2')  # Version(1, 2)
        Version.parse('2')  # Version(2, 0)
        Version(2, 10) > Version(2, 9)  # True
    """

    PATTERN = re.compile(r'^(\d+)(?:\.(\d+))?$')

    def __init__(self, major: int = 0, minor: int = 0):
        self.major = int(major)
        self.minor = int(minor)

    @classmethod
    def parse(cls, value: Any) -> Optional['Version']:
        """
        Parse a dotted version ('1.2', '3') or an int

        Returns:
            Version, or None when the value is not numeric
        """
        if isinstance(value, Version):
            return value
        if isinstance(value, bool) or value is None:
            return None
        if isinstance(value, int):
            return cls(value) if value >= 0 else None

        match = cls.PATTERN.match(str(value).strip())
        if match is None:
            return None
        return cls(match.group(1), match.group(2) or 0)

    @classmethod
    def from_suffix(cls, suffix: str, separator: str = DEFAULT_VERSION_SEPARATOR) -> Optional['Version']:
        """
        Parse a method-name suffix ('1_2', '3') into a Version

        Returns:
            Version, or None when the suffix is malformed
        """
        parts = suffix.split(separator)
        if not 1 <= len(parts) <= 2 or not all(part.isdigit() for part in parts):
            return None
        return cls(*parts)

    def suffix(self, separator: str = DEFAULT_VERSION_SEPARATOR) -> str:
        """Version as a method-name suffix: 1.2 -> '1_2'"""
        return f"{self.major}{separator}{self.minor}"

    def as_tuple(self):
        return (self.major, self.minor)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __lt__(self, other) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.as_tuple() < other.as_tuple()

    def __hash__(self) -> int:
        return hash(self.as_tuple())

    def __bool__(self) -> bool:
        return self.as_tuple() != (0, 0)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"

    def __repr__(self) -> str:
        return f"Version({self.major}, {self.minor})"


ZERO = Version(0, 0)


def versioned_name(action: str, version: Version, separator: str = DEFAULT_VERSION_SEPARATOR) -> str:
    """
    Method name implementing a version of an action

    Example:
        versioned_name('show', Version(2, 1))  # 'show_2_1'
        versioned_name('show', ZERO)  # 'show'
    """
    if not version:
        return action
    return f"{action}{separator}{version.suffix(separator)}"


def split_versioned_name(name: str, separator: str = DEFAULT_VERSION_SEPARATOR):
    """
    Split a method name into (action, version)

    Returns:
        (action, Version) for a well-formed name, (action, None) when the
        name ends with a bare or malformed numeric suffix
    """
    sep = re.escape(separator)
    match = re.match(rf'^(?P<action>.+?){sep}(?P<suffix>\d+(?:{sep}\d+)?)$', name)
    if match:
        return match.group('action'), Version.from_suffix(match.group('suffix'), separator)

    malformed = re.match(rf'^(?P<action>.+?)(?:{sep}[\d{sep}]*)?{sep}$', name)
    if malformed:
        return malformed.group('action'), None

    return name, ZERO


class VersionedActionProvider(ABC):
    """
    Capability of a handler that knows its own versioned actions

    Implementations answer, for a base action name, which versions exist
    and the callable implementing each one.
    """

    @abstractmethod
    def available_versions(self, action: str) -> Dict[Version, Callable]:
        """
        Get the implementations of an action keyed by version

        Args:
            action: Base (unversioned) action name

        Returns:
            Mapping of Version to bound method; empty when none exist
        """
        pass


class RequestVersionState:
    """
    Per-request scratch value carried from resolve() to call()

    Holds the original action name and either the inferred version (no
    version on the request) or the requested one.
    """

    def __init__(
        self,
        action: str,
        inferred: Optional[Version] = None,
        requested: Optional[Version] = None,
        methods: Optional[Dict[Version, str]] = None
    ):
        self.action = action
        self.inferred = inferred
        self.requested = requested
        self.methods = methods or {}

    @property
    def version(self) -> Optional[Version]:
        return self.requested if self.requested is not None else self.inferred

    def method_name(self, version: Version, separator: str = DEFAULT_VERSION_SEPARATOR) -> str:
        """Name of the method implementing version of the original action"""
        return self.methods.get(version) or versioned_name(self.action, version, separator)

    def __repr__(self) -> str:
        return (
            f"<RequestVersionState action={self.action!r} "
            f"inferred={self.inferred!r} requested={self.requested!r}>"
        )


class VersionResolver:
    """
    Version negotiation filters for the Dispatcher

    Usage:
        dispatcher = Dispatcher({'posts': PostsController})
        VersionResolver().attach(dispatcher)
        dispatcher.dispatch({'controller': 'posts', 'action': 'show', 'version': '1.0'})
    """

    def __init__(self, param: str = DEFAULT_VERSION_PARAM, separator: str = DEFAULT_VERSION_SEPARATOR):
        """
        Args:
            param: Route parameter carrying the requested version
            separator: Separator used by the method naming convention
        """
        self.param = param
        self.separator = separator

    def attach(self, dispatcher):
        """Register resolve() and call() on a dispatcher's two stages"""
        dispatcher.apply_filter('resolve', self.resolve)
        dispatcher.apply_filter('call', self.call)
        return dispatcher

    def available_versions(self, controller: Any, action: str) -> Dict[Version, Callable]:
        """
        Versions of an action a controller implements

        Controllers that are not VersionedActionProviders only expose their
        unversioned method, as version 0.
        """
        if not action:
            return {}
        if isinstance(controller, VersionedActionProvider):
            return controller.available_versions(action)

        method = getattr(controller, action, None) if not action.startswith('_') else None
        return {ZERO: method} if callable(method) else {}

    def resolve(self, context, next_stage):
        """
        Infer the newest version, or check the requested one exists

        Raises:
            VersionNotFoundError: the requested version is not implemented
        """
        action = context.params.get('action')
        versions = self.available_versions(context.controller, action)
        methods = {version: getattr(handle, '__name__', action) for version, handle in versions.items()}
        requested = context.params.get(self.param)

        if requested is None or requested == '':
            inferred = max(versions) if versions else ZERO
            context.version_state = RequestVersionState(action, inferred=inferred, methods=methods)
            logger.debug(
                f"Inferred version {inferred} for {action}",
                extra={'action': action, 'candidates': sorted(str(v) for v in versions)}
            )
        else:
            version = Version.parse(requested)
            if version is None or version not in versions:
                raise VersionNotFoundError(action, str(requested))

            context.version_state = RequestVersionState(action, requested=version, methods=methods)
            logger.debug(f"Requested version {version} for {action}", extra={'action': action})

        return next_stage(context)

    def call(self, context, next_stage):
        """
        Rewrite the action to the method implementing the selected version
        """
        params = context.params
        state = getattr(context, 'version_state', None)
        if state is None:
            state = RequestVersionState(params.get('action'))
            context.version_state = state

        if params.get(self.param) in (None, '') and state.inferred is not None:
            params[self.param] = str(state.inferred)

        version = Version.parse(params.get(self.param))
        if version is not None:
            params['action'] = state.method_name(version, self.separator)

        return next_stage(context)
