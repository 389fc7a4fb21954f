"""
AWS Lambda Handlers Module.

Entry-point side of the service: configuration, request routing, response
formatting and the Lambda handler itself (``tvapi.handlers.crud_handler``).

The handlers use AWS Lambda Powertools for:
- Structured logging with correlation IDs
- Distributed tracing with X-Ray
- Custom metrics collection
"""

from tvapi.handlers.utils.observability import logger, tracer, metrics

__all__ = [
    "logger",
    "tracer",
    "metrics",
]
