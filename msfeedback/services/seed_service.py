"""
Seed data: the default external system with its API key and the default
categories. Safe to run repeatedly.
"""

import logging
from typing import Any, Dict

from flask import current_app

from msfeedback.extensions import db
from msfeedback.models.api_key import ApiKey
from msfeedback.models.external_system import ExternalSystem
from msfeedback.services import category_service, external_service
from msfeedback.utils.auth import hash_api_key

logger = logging.getLogger(__name__)


def seed_defaults() -> Dict[str, Any]:
    db.create_all()

    name = current_app.config["DEFAULT_EXTERNAL_SYSTEM_NAME"]
    raw_key = current_app.config["DEFAULT_API_KEY"]

    system = ExternalSystem.query.filter_by(name=name).first()
    created_system = system is None
    if created_system:
        system = external_service.create_system(
            name,
            permissions=external_service.DEFAULT_PERMISSIONS,
            description="Default system for partner integrations",
            rate_limit=100,
        )

    created_key = False
    if raw_key and ApiKey.query.filter_by(key=hash_api_key(raw_key)).first() is None:
        external_service.issue_key(system, raw_key=raw_key, name="Default API Key")
        created_key = True

    categories = category_service.ensure_default_categories()
    logger.info("Seed finished: system=%s key=%s categories=%s", created_system, created_key, categories)
    return {"system": system, "created_system": created_system, "created_key": created_key, "categories": categories}
