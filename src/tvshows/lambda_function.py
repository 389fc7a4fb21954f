"""
TV shows Lambda Function - Entry point for the /tvshows API.

This module serves as the Lambda function entry point that delegates to the
shared CRUD handler, pinned to the tvshows entity type.
"""

import os
import sys
from typing import Any, Dict

# Add the service module to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.utilities.typing import LambdaContext
from tvapi.handlers.crud_handler import create_lambda_handler

tvshows_handler = create_lambda_handler('tvshows')


def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Lambda function entry point for the /tvshows API.

    Args:
        event: Lambda event payload (API Gateway event)
        context: Lambda context object

    Returns:
        API Gateway response dictionary
    """
    return tvshows_handler(event, context)
