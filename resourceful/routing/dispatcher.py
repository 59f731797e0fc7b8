"""
Dispatcher
Resolves a controller for matched route params and invokes the action

Dispatch runs two filter stages around the invocation:

    resolve  after the controller is looked up
    call     immediately before the action method is called

A filter is a callable (context, next_stage) that returns next_stage(context),
optionally after changing the context.
"""
from typing import Any, Callable, Dict, List, Mapping, Optional
from functools import wraps

from resourceful.defaults import RESERVED_PARAMS
from resourceful.exceptions import ActionNotFoundError, ConfigurationError, ControllerNotFoundError
from resourceful.logging import getLogger
from resourceful.support.str import Str

logger = getLogger(__name__)

Filter = Callable[['DispatchContext', Callable], Any]


class DispatchContext:
    """
    State of one dispatch, threaded through every filter

    Attributes:
        params: Route params (controller, action, http:method, path values)
        request: The framework request object, if any
        controller: Controller instance once resolved
        version_state: Scratch value left by the version resolver
    """

    def __init__(self, params: Mapping[str, Any], request: Any = None):
        self.params: Dict[str, Any] = dict(params)
        self.request = request
        self.controller: Any = None
        self.version_state = None

    @property
    def action(self) -> Optional[str]:
        return self.params.get('action')

    def arguments(self) -> Dict[str, Any]:
        """Params passed to the action method as keyword arguments"""
        return {key: value for key, value in self.params.items() if key not in RESERVED_PARAMS}

    def __repr__(self) -> str:
        return f"<DispatchContext {self.params.get('controller')}@{self.action}>"


class Dispatcher:
    """
    Controller registry plus the resolve/call filter pipeline

    Usage:
        dispatcher = Dispatcher({'posts': PostsController})
        dispatcher.apply_filter('call', audit_filter)
        dispatcher.dispatch({'controller': 'posts', 'action': 'index'}, request)
    """

    STAGES = ('resolve', 'call')

    def __init__(self, controllers: Optional[Mapping[str, Any]] = None):
        """
        Args:
            controllers: Controller classes or instances keyed by resource name
        """
        self._controllers: Dict[str, Any] = {}
        self._filters: Dict[str, List[Filter]] = {stage: [] for stage in self.STAGES}

        for name, controller in (controllers or {}).items():
            self.register(name, controller)

    def register(self, name: str, controller: Any) -> 'Dispatcher':
        """
        Register a controller under a resource name

        Classes are instantiated once per dispatch; instances are shared.
        The name is normalized the same way resource names are ('Post' -> 'posts').
        """
        self._controllers[Str.tableize(name)] = controller
        return self

    def has(self, name: str) -> bool:
        return Str.tableize(name) in self._controllers

    def apply_filter(self, stage: str, filter_fn: Filter) -> Filter:
        """
        Add a filter to a stage; filters run in registration order

        Raises:
            ConfigurationError: unknown stage
        """
        if stage not in self._filters:
            raise ConfigurationError(f"Unknown dispatch stage '{stage}', expected one of {self.STAGES}")
        self._filters[stage].append(filter_fn)
        return filter_fn

    def get_filters(self, stage: str) -> List[Filter]:
        return list(self._filters.get(stage, []))

    def dispatch(self, params: Mapping[str, Any], request: Any = None) -> Any:
        """
        Dispatch matched route params to a controller action

        Returns:
            Whatever the action returns (awaitables are not awaited)

        Raises:
            ControllerNotFoundError: no controller registered for params['controller']
            ActionNotFoundError: the final action is not a public method
        """
        context = DispatchContext(params, request)
        context.controller = self._resolve_controller(context)
        return self._run('resolve', context, self._finalize)

    def _resolve_controller(self, context: DispatchContext) -> Any:
        name = context.params.get('controller')
        controller = self._controllers.get(Str.tableize(str(name))) if name else None
        if controller is None:
            raise ControllerNotFoundError(str(name))

        if isinstance(controller, type):
            return controller()
        return controller

    def _finalize(self, context: DispatchContext) -> Any:
        return self._run('call', context, self._invoke)

    def _run(self, stage: str, context: DispatchContext, last: Callable) -> Any:
        # Wrap in reverse so execution order matches registration order
        chain = last
        for filter_fn in reversed(self._filters[stage]):
            chain = self._create_wrapper(filter_fn, chain)
        return chain(context)

    @staticmethod
    def _create_wrapper(filter_fn: Filter, next_stage: Callable) -> Callable:
        @wraps(next_stage)
        def wrapper(context: DispatchContext):
            return filter_fn(context, next_stage)

        wrapper._filter = filter_fn
        return wrapper

    def _invoke(self, context: DispatchContext) -> Any:
        action = context.action
        controller_name = str(context.params.get('controller'))

        method = None
        if action and not action.startswith('_'):
            method = getattr(context.controller, action, None)
        if not callable(method):
            raise ActionNotFoundError(controller_name, str(action))

        logger.debug(
            f"Dispatching {controller_name}@{action}",
            extra={'controller': controller_name, 'action': action}
        )
        return method(context.request, **context.arguments())
