"""
Dispatch Error Handler
Renders routing and dispatch failures as JSON responses
"""
import traceback
from typing import Any, Dict

from sanic import Request
from sanic.exceptions import SanicException
from sanic.response import HTTPResponse, json

from resourceful.logging import getLogger

# Attributes copied from a not-found error into the response 'details'
DETAIL_ATTRIBUTES = ('controller', 'action', 'version')

GENERIC_MESSAGE = "An error occurred while processing your request"


class ErrorHandler:
    """
    Turns exceptions raised while dispatching into JSON error bodies

    Usage:
        handler = ErrorHandler(debug=True)
        app.exception(FrameworkException)(handler.handle_error)

    Body:
        {"success": false, "message": "...", "type": "VersionNotFoundError",
         "code": "version_not_found", "details": {"action": "show", "version": "9.9"}}
    """

    def __init__(self, debug: bool = False, include_trace: bool = False):
        """
        Args:
            debug: Expose raw error messages and request info
            include_trace: Add the formatted traceback (honoured only with debug)
        """
        self.debug = debug
        self.include_trace = include_trace and debug
        self.logger = getLogger(__name__)

    async def handle_error(self, request: Request, error: Exception) -> HTTPResponse:
        """
        Build the JSON response for an error and log it
        """
        status = self.status_for(error)
        self._report(request, error, status)
        return json(self.render(request, error), status=status)

    def render(self, request: Request, error: Exception) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            'success': False,
            'message': self.message_for(error),
            'type': type(error).__name__,
        }

        code = getattr(error, 'error_code', None)
        if code:
            body['code'] = code

        details = {
            name: getattr(error, name)
            for name in DETAIL_ATTRIBUTES
            if getattr(error, name, None) is not None
        }
        if details:
            body['details'] = details

        if self.include_trace:
            body['trace'] = traceback.format_exception(type(error), error, error.__traceback__)

        if self.debug:
            body['debug'] = {
                'path': request.path,
                'method': request.method,
                'url': str(request.url),
            }

        return body

    def message_for(self, error: Exception) -> str:
        """
        Safe message for the client

        Framework and Sanic errors carry messages meant for clients; anything
        else is replaced by a generic message outside debug mode.
        """
        if isinstance(error, SanicException):
            return str(error)
        if hasattr(error, 'message'):
            return error.message
        return str(error) if self.debug else GENERIC_MESSAGE

    @staticmethod
    def status_for(error: Exception) -> int:
        return getattr(error, 'status_code', None) or 500

    def _report(self, request: Request, error: Exception, status: int):
        summary = f"{status} {type(error).__name__} on {request.method} {request.path}"
        context = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'status_code': status,
            'method': request.method,
            'path': request.path,
        }

        # Unexpected failures keep their traceback; lookups that miss do not
        if status >= 500:
            self.logger.error(summary, extra=context, exc_info=error)
        else:
            self.logger.warning(summary, extra=context)
