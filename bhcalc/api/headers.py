"""
Utility functions for HTTP alert headers.

Clients read ``X-<app>-alert`` to show a notification after a successful
change and ``X-<app>-error`` after a rejected one.
"""

import logging
from typing import Dict

logger = logging.getLogger(__name__)


def create_alert(application_name: str, message: str, param: str) -> Dict[str, str]:
    return {
        f"X-{application_name}-alert": message,
        f"X-{application_name}-params": param,
    }


def create_entity_creation_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(
        application_name, f"A new {entity_name} is created with identifier {param}", param
    )


def create_entity_update_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(
        application_name, f"A {entity_name} is updated with identifier {param}", param
    )


def create_entity_deletion_alert(application_name: str, entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(
        application_name, f"A {entity_name} is deleted with identifier {param}", param
    )


def create_failure_alert(
    application_name: str,
    entity_name: str,
    error_key: str,
    default_message: str,
) -> Dict[str, str]:
    logger.error("Entity processing failed, %s", default_message)
    return {
        f"X-{application_name}-error": f"error.{error_key}",
        f"X-{application_name}-params": entity_name,
    }
