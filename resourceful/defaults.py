"""
Framework Defaults
Package-wide constants shared by routing, versioning and logging
"""

# Version dispatch
DEFAULT_VERSION_SEPARATOR = '_'
DEFAULT_VERSION_PARAM = 'version'

# Binding map keys
HTTP_METHOD_PARAM = 'http:method'
RESERVED_PARAMS = ('controller', 'action', HTTP_METHOD_PARAM)

# Placeholder constraints for the built-in resource templates
ID_PATTERN = r'[0-9a-fA-F]{24}|[0-9]+'
VERSION_PATTERN = r'[0-9]+\.[0-9]+'
TYPE_PATTERN = r'\w+'

# Logging
DEFAULT_LOG_ENV_VAR = 'RESOURCEFUL_ENV'
DEFAULT_LOG_FORMAT = 'json'
