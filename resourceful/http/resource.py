"""
Resource Registrar
Generates RESTful resource routes (Laravel-style)

A resource name and a few options become an ordered list of Route objects.
Registration is left to the caller (see Router.resource()).
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union
import re

from resourceful.defaults import HTTP_METHOD_PARAM, ID_PATTERN, TYPE_PATTERN, VERSION_PATTERN
from resourceful.exceptions import ConfigurationError
from resourceful.logging import getLogger
from resourceful.routing.route import PLACEHOLDER, Route
from resourceful.support.str import Str

logger = getLogger(__name__)

DEFAULT_WHERES = {
    'id': ID_PATTERN,
    'version': VERSION_PATTERN,
    'type': TYPE_PATTERN,
}


class ActionTemplate:
    """
    Description of one CRUD action

    Usage:
        ActionTemplate('/{resource}/{id}/publish', 'POST')
        ActionTemplate('/{resource}/{id}[.{type}]', 'GET', action='preview')
    """

    def __init__(
        self,
        template: str,
        method: Union[str, Iterable[str]],
        action: Optional[str] = None,
        wheres: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None
    ):
        self.template = template
        self.method = method
        self.action = action
        self.params = dict(params or {})

        # Built-in constraints apply to any placeholder the template uses
        names = PLACEHOLDER.findall(template or '')
        self.wheres = {name: DEFAULT_WHERES[name] for name in names if name in DEFAULT_WHERES}
        self.wheres.update(wheres or {})

    @classmethod
    def from_value(cls, key: str, value: Union['ActionTemplate', Mapping[str, Any]]) -> 'ActionTemplate':
        """
        Build an ActionTemplate from a user-supplied entry

        Mappings accept 'template', 'method' (or params['http:method']),
        'action', 'wheres' and 'params'.

        Raises:
            ConfigurationError: template or method binding missing
        """
        if isinstance(value, ActionTemplate):
            template = value
        elif isinstance(value, Mapping):
            params = dict(value.get('params') or {})
            method = value.get('method') or params.pop(HTTP_METHOD_PARAM, None)
            template = cls(
                value.get('template'),
                method,
                action=value.get('action'),
                wheres=value.get('wheres'),
                params=params,
            )
        else:
            raise ConfigurationError(
                f"Action template '{key}' must be a mapping or ActionTemplate, got {type(value).__name__}"
            )

        if not template.template:
            raise ConfigurationError(f"Action template '{key}' is missing a template")
        if not template.method:
            raise ConfigurationError(f"Action template '{key}' is missing an HTTP method binding")

        return template

    def bindings(self, controller: str, key: str) -> Dict[str, Any]:
        """Build the parameter-binding map for one generated route"""
        return {
            **self.params,
            HTTP_METHOD_PARAM: self.method,
            'controller': controller,
            'action': self.action or key,
        }

    def __repr__(self) -> str:
        return f"<ActionTemplate [{self.method}] {self.template}>"


class ResourceConfig:
    """
    Registry of action templates and the class used to build routes

    Built once at startup and passed to ResourceRegistrar; it must not be
    mutated while requests are being handled.

    Usage:
        config = ResourceConfig()
        config.config({'types': {'publish': {'template': '/{resource}/{id}/publish', 'method': 'POST'}}})
        config.config()  # {'classes': {...}, 'types': {...}}
    """

    # Resource route definitions, in generation order
    DEFAULT_TYPES = {
        'index': {'template': '/{resource}[/v{version}][.{type}]', 'method': 'GET'},      # GET    /posts
        'show': {'template': '/{resource}/{id}[/v{version}][.{type}]', 'method': 'GET'},  # GET    /posts/{id}
        'add': {'template': '/{resource}/add[/v{version}]', 'method': 'GET'},             # GET    /posts/add
        'create': {'template': '/{resource}[/v{version}][.{type}]', 'method': 'POST'},    # POST   /posts
        'edit': {'template': '/{resource}/{id}/edit[/v{version}]', 'method': 'GET'},      # GET    /posts/{id}/edit
        'update': {'template': '/{resource}/{id}[/v{version}][.{type}]', 'method': 'PUT'},      # PUT    /posts/{id}
        'delete': {'template': '/{resource}/{id}[/v{version}][.{type}]', 'method': 'DELETE'},   # DELETE /posts/{id}
    }

    DEFAULT_CLASSES = {
        'route': Route,
    }

    def __init__(self, types: Optional[Mapping] = None, classes: Optional[Mapping] = None):
        self._classes: Dict[str, Any] = dict(self.DEFAULT_CLASSES)
        self._types: Dict[str, ActionTemplate] = {
            key: ActionTemplate.from_value(key, value)
            for key, value in self.DEFAULT_TYPES.items()
        }

        overrides = {}
        if types:
            overrides['types'] = types
        if classes:
            overrides['classes'] = classes
        if overrides:
            self.config(overrides)

    def config(self, config: Optional[Mapping[str, Mapping]] = None) -> Optional[Dict[str, Dict]]:
        """
        Read or merge the registry

        Without arguments returns a {'classes', 'types'} snapshot. With a
        mapping, merges its 'classes' and/or 'types' over the current
        entries; caller entries win, unspecified keys are left untouched.
        """
        if not config:
            return {'classes': dict(self._classes), 'types': dict(self._types)}

        if 'classes' in config:
            self._classes = {**self._classes, **config['classes']}

        if 'types' in config:
            types = dict(self._types)
            for key, value in config['types'].items():
                types[key] = ActionTemplate.from_value(key, value)
            self._types = types

        return None

    @property
    def types(self) -> Dict[str, ActionTemplate]:
        return dict(self._types)

    @property
    def classes(self) -> Dict[str, Any]:
        return dict(self._classes)


class ResourceRegistrar:
    """
    Generates RESTful resource routes

    Usage:
        registrar = ResourceRegistrar()
        registrar.generate('Posts')
        registrar.generate('posts', only=['index', 'show'])
        registrar.generate('posts', {'except': ['delete'], 'scope': '/api'})
    """

    HTML_FORM_ACTIONS = ['add', 'edit']

    def __init__(self, config: Optional[ResourceConfig] = None):
        self.config = config or ResourceConfig()

    def generate(self, name: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> List[Route]:
        """
        Generate resource routes

        Args:
            name: Resource name, singular or plural, any case (e.g. 'Post', 'posts')
            options: Mapping of options (kwargs are merged over it):
                - only: Action names to keep
                - except: Action names to drop (applied before 'only')
                - types: Extra or replacement action templates
                - scope: Path prefix for every template
                - names: Custom route names keyed by action

        Returns:
            List of routes in action order

        Raises:
            ConfigurationError: empty name or malformed 'types' entry
        """
        options = {**(options or {}), **kwargs}
        if 'except_' in options:
            options['except'] = options.pop('except_')

        if not name or not str(name).strip(' /'):
            raise ConfigurationError("Resource name must not be empty")

        resource = Str.tableize(str(name).strip(' /'))
        scope = self._normalize_scope(options.get('scope'))
        names = options.get('names') or {}
        route_class = self.config.classes['route']

        routes = []
        for key, action_template in self._get_resource_types(options).items():
            template = scope + Str.insert(action_template.template, {'resource': resource})
            params = action_template.bindings(resource, key)
            route_name = names.get(key, self._route_name(scope, resource, params['action']))

            route = route_class(template, params, dict(action_template.wheres), name=route_name)
            logger.debug(
                f"Generated route {route_name}",
                extra={'uri': template, 'http_method': params[HTTP_METHOD_PARAM]}
            )
            routes.append(route)

        return routes

    def generate_api(self, name: str, options: Optional[Mapping[str, Any]] = None, **kwargs) -> List[Route]:
        """
        Generate API resource routes (excludes the 'add' and 'edit' form actions)
        """
        options = {**(options or {}), **kwargs}
        exclude = self._as_list(options.pop('except', options.pop('except_', None)))
        options['except'] = exclude + [a for a in self.HTML_FORM_ACTIONS if a not in exclude]

        return self.generate(name, options)

    def _get_resource_types(self, options: Mapping[str, Any]) -> Dict[str, ActionTemplate]:
        """
        Get the action templates to generate, in order

        Caller 'types' are merged over the configured ones, then 'except'
        and finally 'only' are applied.
        """
        types = self.config.types

        for key, value in (options.get('types') or {}).items():
            types[key] = ActionTemplate.from_value(key, value)

        for key in self._as_list(options.get('except')):
            types.pop(key, None)

        if options.get('only') is not None:
            only = self._as_list(options['only'])
            types = {key: value for key, value in types.items() if key in only}

        return types

    @staticmethod
    def _as_list(value: Union[None, str, Iterable[str]]) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return list(value)

    @staticmethod
    def _normalize_scope(scope: Optional[str]) -> str:
        """'api/v2/' -> '/api/v2'"""
        if not scope:
            return ''
        scope = scope.strip('/')
        return f"/{scope}" if scope else ''

    @staticmethod
    def _route_name(scope: str, resource: str, action: str) -> str:
        """
        Build a dotted route name, e.g. '/api' + posts + index -> 'api.posts.index'
        """
        prefix = re.sub(r'\{(\w+)\??}', r'\1', scope.strip('/')).replace('/', '.')
        name = f"{resource}.{action}"
        return f"{prefix}.{name}" if prefix else name
