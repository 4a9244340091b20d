"""
Centralized logging configuration for Fleet Manager
Provides structured JSON logging and request/response tracking
"""

import os
import sys
import json
import uuid
import logging
from datetime import datetime, timezone
from typing import Dict, Any
from flask import has_request_context, request, g
import traceback

# LogRecord attributes that are not user-supplied `extra` fields
_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName',
    'processName', 'process', 'message', 'taskName', 'correlation_id'
}


class JSONFormatter(logging.Formatter):
    """
    Custom JSON formatter for structured logging
    Includes correlation ID, request context, and application metadata
    """

    def __init__(self):
        super().__init__()
        self.application_name = "fleet_manager"
        self.environment = os.environ.get('FLASK_ENV', 'development')

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON"""
        log_data: Dict[str, Any] = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'application': self.application_name,
            'environment': self.environment
        }

        correlation_id = getattr(record, 'correlation_id', None)
        if correlation_id:
            log_data['correlation_id'] = correlation_id

        if has_request_context():
            log_data['request'] = {
                'method': request.method,
                'path': request.path,
                'remote_addr': request.remote_addr
            }

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__ if record.exc_info[0] else None,
                'message': str(record.exc_info[1]) if record.exc_info[1] else None,
                'traceback': traceback.format_exception(*record.exc_info)
            }

        extra_fields = {
            key: value for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS
        }
        if extra_fields:
            log_data['extra'] = extra_fields

        if record.levelno in (logging.DEBUG, logging.ERROR):
            log_data['location'] = {
                'file': record.pathname,
                'function': record.funcName,
                'line': record.lineno
            }

        return json.dumps(log_data, ensure_ascii=False, default=str)


class RequestContextFilter(logging.Filter):
    """
    Filter to inject the request correlation ID into log records
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = getattr(g, 'correlation_id', None) if has_request_context() else None
        return True


def resolve_log_level() -> str:
    log_level = os.environ.get('LOG_LEVEL', 'INFO').upper()
    if log_level not in ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']:
        log_level = 'INFO'
    return log_level


def use_json_logging() -> bool:
    return (
        os.environ.get('USE_JSON_LOGGING', 'false').lower() == 'true' or
        os.environ.get('FLASK_ENV') == 'production'
    )


def setup_logging(app=None) -> logging.Logger:
    """
    Configure logging for the application.
    Returns the root logger.
    """
    log_level = resolve_log_level()
    json_format = use_json_logging()

    if json_format:
        formatter = JSONFormatter()
    else:
        # Development-friendly format
        formatter = logging.Formatter(
            '[%(asctime)s] %(levelname)s in %(name)s: %(message)s'
        )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(RequestContextFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Replace handlers installed by a previous setup_logging call
    for handler in list(root_logger.handlers):
        if getattr(handler, '_fleet_manager_handler', False):
            root_logger.removeHandler(handler)
    console_handler._fleet_manager_handler = True
    root_logger.addHandler(console_handler)

    # Silence noisy third-party loggers in production
    if os.environ.get('FLASK_ENV') == 'production':
        logging.getLogger('werkzeug').setLevel(logging.WARNING)
        logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    if app:
        app.logger.info(f"Logging configured: level={log_level}, json_format={json_format}")

    return root_logger


def log_request_start():
    """Mark the start of request processing and assign a correlation ID"""
    g.request_start_time = datetime.now().timestamp()
    g.correlation_id = request.headers.get('X-Request-ID') or str(uuid.uuid4())


def log_request_end(response):
    """Log request completion with timing and response info"""
    if hasattr(g, 'request_start_time'):
        duration = datetime.now().timestamp() - g.request_start_time

        logger = logging.getLogger('requests')

        extra_data = {
            'method': request.method,
            'path': request.path,
            'status_code': response.status_code,
            'duration_ms': round(duration * 1000, 2)
        }

        # Determine log level based on response status
        if response.status_code >= 500:
            log_level = logging.ERROR
        elif response.status_code >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(log_level, f"Request completed: {request.method} {request.path}", extra=extra_data)

    if hasattr(g, 'correlation_id'):
        response.headers['X-Request-ID'] = g.correlation_id

    return response
