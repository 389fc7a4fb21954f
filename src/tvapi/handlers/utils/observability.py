"""
Centralized observability utilities for the CRUD Lambda handlers.

This module provides configured instances of AWS Lambda Powertools for logging,
tracing, and metrics collection shared by every entity handler.
"""

import os

from aws_lambda_powertools.logging import Logger
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

# Defaults used when POWERTOOLS_SERVICE_NAME / POWERTOOLS_METRICS_NAMESPACE are unset
SERVICE_NAME = os.environ.get('POWERTOOLS_SERVICE_NAME', 'tv-catalog-api')
METRICS_NAMESPACE = os.environ.get('POWERTOOLS_METRICS_NAMESPACE', 'TvCatalog')

# JSON output format, level from LOG_LEVEL
logger: Logger = Logger(service=SERVICE_NAME)

# Disabled by setting POWERTOOLS_TRACE_DISABLED to "true"
tracer: Tracer = Tracer(service=SERVICE_NAME)

metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)
