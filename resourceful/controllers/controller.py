"""
Base Controller
Controllers that register their versioned actions at class creation

    class PostsController(Controller):
        def show(self, request, **params): ...        # version 0
        def show_1_0(self, request, **params): ...    # version 1.0

        @version('2.0')
        def show_with_author(self, request, **params): ...
"""
from typing import Callable, Dict, Optional

from resourceful.defaults import DEFAULT_VERSION_SEPARATOR
from resourceful.exceptions import ConfigurationError
from resourceful.http.versioning import Version, VersionedActionProvider, split_versioned_name
from resourceful.logging import getLogger

logger = getLogger(__name__)

VERSION_ATTRIBUTE = '_resourceful_version'


def version(number: str, action: Optional[str] = None) -> Callable:
    """
    Mark a method as the implementation of one version of an action

    Args:
        number: Dotted version ('2.0', '3')
        action: Base action name (default: longest indexed action prefixing the method name)

    Usage:
        @version('2.0', action='show')
        def show_with_author(self, request, **params): ...
    """
    parsed = Version.parse(number)
    if parsed is None:
        raise ConfigurationError(f"Invalid action version '{number}'")

    def decorator(func: Callable) -> Callable:
        setattr(func, VERSION_ATTRIBUTE, (action, parsed))
        return func

    return decorator


class Controller(VersionedActionProvider):
    """
    Base controller class

    Public methods are indexed once per subclass by the naming convention
    (or the @version decorator). Names with a bare or malformed version
    suffix, such as 'show_', are left out of the index.
    """

    version_separator: str = DEFAULT_VERSION_SEPARATOR

    _actions: Dict[str, Dict[Version, str]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._actions = cls._index_actions()

    @classmethod
    def _index_actions(cls) -> Dict[str, Dict[Version, str]]:
        actions: Dict[str, Dict[Version, str]] = {}
        decorated = []

        for name in dir(cls):
            if name.startswith('_') or name in vars(Controller):
                continue
            member = getattr(cls, name)
            if not callable(member) or isinstance(member, type):
                continue

            marker = getattr(member, VERSION_ATTRIBUTE, None)
            if marker is not None:
                decorated.append((name, *marker))
                continue

            action, number = split_versioned_name(name, cls.version_separator)
            if number is None:
                logger.debug(
                    f"Ignoring malformed versioned method {cls.__name__}.{name}",
                    extra={'controller': cls.__name__, 'method': name}
                )
                continue
            actions.setdefault(action, {})[number] = name

        # Explicit @version registrations are applied last so they win collisions
        for name, action, number in decorated:
            if action is None:
                action = cls._base_action(name, actions)
            actions.setdefault(action, {})[number] = name

        return actions

    @classmethod
    def _base_action(cls, name: str, actions: Dict[str, Dict[Version, str]]) -> str:
        """
        Action a decorated method belongs to when @version() names none

        The longest indexed action that prefixes the method name wins
        ('list_all_fast' -> 'list_all'); otherwise the name up to the first
        separator is used.
        """
        sep = cls.version_separator
        known = [action for action in actions if name.startswith(action + sep)]
        if known:
            return max(known, key=len)
        return name.split(sep)[0]

    @classmethod
    def actions(cls) -> Dict[str, Dict[Version, str]]:
        """Get the action index: action -> {Version: method name}"""
        return {action: dict(versions) for action, versions in cls._actions.items()}

    def available_versions(self, action: str) -> Dict[Version, Callable]:
        """
        Get bound methods implementing an action, keyed by version
        """
        return {
            number: getattr(self, name)
            for number, name in self._actions.get(action, {}).items()
        }
