"""
Route Class
Represents a single route definition with fluent API (Laravel-style)

A route is a path template plus a parameter-binding map. Templates use
{name} placeholders; a fragment wrapped in square brackets is optional:

    /posts/{id}[/v{version}][.{type}]
"""
from typing import Any, Dict, List, Optional, Tuple
import itertools
import re

from resourceful.defaults import HTTP_METHOD_PARAM

PLACEHOLDER = re.compile(r'\{(\w+)\??}')
OPTIONAL_FRAGMENT = re.compile(r'(\[[^\[\]]*\])')


class Route:
    """
    Route class with fluent API for defining routes

    Usage:
        route = Route('/posts/{id}', {'controller': 'posts', 'action': 'show', 'http:method': 'GET'})
        route.name('posts.show').where('id', '[0-9]+')
    """

    def __init__(
        self,
        template: str,
        params: Optional[Dict[str, Any]] = None,
        wheres: Optional[Dict[str, str]] = None,
        **options
    ):
        """
        Initialize a Route instance

        Args:
            template: Route template, e.g. '/posts/{id}[.{type}]'
            params: Binding map (controller, action, http:method, ...)
            wheres: Per-placeholder regex constraints
            **options: Additional route options
        """
        self.template = '/' + template.strip('/')
        self._params: Dict[str, Any] = dict(params or {})
        self._wheres: Dict[str, str] = dict(wheres or {})
        self._defaults: Dict[str, Any] = {}
        self._name: Optional[str] = options.pop('name', None)
        self._regex: Optional[re.Pattern] = None
        self._options = options

        method = self._params.get(HTTP_METHOD_PARAM)
        if method is None:
            self.methods: List[str] = []
        elif isinstance(method, str):
            self.methods = [method.upper()]
        else:
            self.methods = [m.upper() for m in method]

        self._parameter_names = PLACEHOLDER.findall(self.template)

    def name(self, name: str) -> 'Route':
        """
        Set the route name

        Returns:
            Self for method chaining
        """
        self._name = name
        return self

    def where(self, parameter, pattern: Optional[str] = None) -> 'Route':
        """
        Add parameter constraints

        Args:
            parameter: Parameter name or dict of constraints
            pattern: Regex pattern (if parameter is string)

        Returns:
            Self for method chaining

        Usage:
            route.where('id', '[0-9]+')
            route.where({'id': '[0-9]+', 'type': 'json|xml'})
        """
        if isinstance(parameter, dict):
            self._wheres.update(parameter)
        elif pattern is not None:
            self._wheres[parameter] = pattern
        self._regex = None
        return self

    def defaults(self, key, value: Any = None) -> 'Route':
        """
        Set default values for parameters

        Returns:
            Self for method chaining
        """
        if isinstance(key, dict):
            self._defaults.update(key)
        else:
            self._defaults[key] = value
        return self

    def get_name(self) -> Optional[str]:
        """Get the route name"""
        return self._name

    def get_uri(self) -> str:
        """Get the template, optional fragments included"""
        return self.template

    def get_params(self) -> Dict[str, Any]:
        """Get a copy of the parameter-binding map"""
        return dict(self._params)

    def get_controller(self) -> Optional[str]:
        return self._params.get('controller')

    def get_action(self) -> Optional[str]:
        return self._params.get('action')

    def get_action_name(self) -> str:
        """Get the action name (for display)"""
        return f"{self.get_controller()}@{self.get_action()}"

    def get_methods(self) -> List[str]:
        """Get HTTP methods (empty means any method)"""
        return self.methods

    def get_parameter_names(self) -> List[str]:
        """Get parameter names from the template"""
        return self._parameter_names

    def get_wheres(self) -> Dict[str, str]:
        """Get parameter constraints"""
        return self._wheres

    def get_defaults(self) -> Dict[str, Any]:
        """Get default parameter values"""
        return self._defaults

    def variants(self) -> List[str]:
        """
        Expand optional fragments into concrete templates

        Templates with fewer optional fragments come first:

            '/posts[.{type}]' -> ['/posts', '/posts.{type}']
        """
        choices: List[List[Tuple[int, str]]] = []
        for part in OPTIONAL_FRAGMENT.split(self.template):
            if not part:
                continue
            if part.startswith('['):
                choices.append([(0, ''), (1, part[1:-1])])
            else:
                choices.append([(0, part)])

        expanded = [
            (sum(used for used, _ in combo), ''.join(text for _, text in combo))
            for combo in itertools.product(*choices)
        ]
        expanded.sort(key=lambda item: item[0])
        return [template for _, template in expanded]

    def get_compiled_uris(self) -> List[str]:
        """
        Get one Sanic-style URI per template variant

        Converts {id} to <id> or <id:type> based on constraints
        """
        return [self._compile_for_sanic(variant) for variant in self.variants()]

    def _compile_for_sanic(self, uri: str) -> str:
        """
        Sanic only binds parameters that fill a whole path segment, so a
        segment mixing text and placeholders ('{id}.{type}', 'v{version}')
        becomes a single regex parameter named after its first placeholder.
        The handler re-matches the path to bind the individual values.
        """
        def convert_param(match):
            param_name = match.group(1)

            if param_name not in self._wheres:
                return f"<{param_name}>"

            constraint = self._wheres[param_name]

            # Map common constraints to Sanic types
            if constraint == r'[0-9]+':
                return f"<{param_name}:int>"
            if constraint == r'[a-zA-Z0-9\-]+':
                return f"<{param_name}:slug>"
            if constraint == r'.*':
                return f"<{param_name}:path>"

            if '|' in constraint:
                constraint = f"(?:{constraint})"
            return f"<{param_name}:{constraint}>"

        segments = []
        for segment in uri.split('/'):
            names = PLACEHOLDER.findall(segment)
            if not names or PLACEHOLDER.fullmatch(segment):
                segments.append(PLACEHOLDER.sub(convert_param, segment))
            else:
                segments.append(f"<{names[0]}_segment:{self._segment_regex(segment)}>")
        return '/'.join(segments)

    def _segment_regex(self, text: str) -> str:
        out = []
        position = 0
        for match in PLACEHOLDER.finditer(text):
            out.append(re.escape(text[position:match.start()]))
            # Sanic splits patterns on a literal '/', so the class spells it as \x2f
            default = r'[^\x2f]+'
            out.append(f"(?:{self._wheres.get(match.group(1), default)})")
            position = match.end()
        out.append(re.escape(text[position:]))
        return ''.join(out)

    def compile_regex(self) -> re.Pattern:
        """
        Compile the template into an anchored regex with named groups

        Optional fragments become optional non-capturing groups.
        """
        if self._regex is not None:
            return self._regex

        parts = []
        for part in OPTIONAL_FRAGMENT.split(self.template):
            if not part:
                continue
            if part.startswith('['):
                parts.append(f"(?:{self._fragment_regex(part[1:-1])})?")
            else:
                parts.append(self._fragment_regex(part))

        self._regex = re.compile('^' + ''.join(parts) + '$')
        return self._regex

    def _fragment_regex(self, text: str) -> str:
        out = []
        position = 0
        for match in PLACEHOLDER.finditer(text):
            out.append(re.escape(text[position:match.start()]))
            param_name = match.group(1)
            pattern = self._wheres.get(param_name, r'[^/]+')
            out.append(f"(?P<{param_name}>{pattern})")
            position = match.end()
        out.append(re.escape(text[position:]))
        return ''.join(out)

    def match(self, uri: str, method: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        Match a request path and method against this route

        Args:
            uri: Request path
            method: HTTP method (not checked when None)

        Returns:
            Bound parameters (defaults, binding map, path values) or None
        """
        if method is not None and self.methods and method.upper() not in self.methods:
            return None

        path = '/' + uri.strip('/')
        found = self.compile_regex().match(path)
        if found is None:
            return None

        bound = {**self._defaults, **self._params}
        bound.update({key: value for key, value in found.groupdict().items() if value is not None})
        return bound

    def matches(self, uri: str, method: str) -> bool:
        """
        Check if route matches given URI and method

        Returns:
            True if route matches
        """
        return self.match(uri, method) is not None

    def to_dict(self) -> Dict[str, Any]:
        route_dict = {
            'name': self._name,
            'uri': self.template,
            'methods': list(self.methods),
            'params': self.get_params(),
            'parameters': list(self._parameter_names),
        }
        if self._wheres:
            route_dict['constraints'] = dict(self._wheres)
        if self._defaults:
            route_dict['defaults'] = dict(self._defaults)
        return route_dict

    def __eq__(self, other) -> bool:
        if not isinstance(other, Route):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __hash__(self) -> int:
        return hash((self.template, tuple(self.methods), self.get_action_name()))

    def __repr__(self) -> str:
        """String representation of route"""
        methods_str = '|'.join(self.methods) or 'ANY'
        name_str = f" (name: {self._name})" if self._name else ""
        return f"<Route [{methods_str}] {self.template} {self.get_action_name()}{name_str}>"
