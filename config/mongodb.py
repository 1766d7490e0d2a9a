from __future__ import annotations

import logging

import certifi
import mongoengine
from django.conf import settings

logger = logging.getLogger(__name__)

def connect_mongodb() -> None:
    mongo_uri = getattr(settings, "MONGO_URI", "mongodb://localhost:27017/storefront")
    db_name = getattr(settings, "MONGODB_DB_NAME", "storefront")

    connect_kwargs = {
        "db": db_name,
        "host": mongo_uri,
        "alias": "default",
    }
    if getattr(settings, "MONGO_TLS", False):
        connect_kwargs["tlsCAFile"] = certifi.where()

    try:
        mongoengine.connect(**connect_kwargs)
    except Exception:
        logger.exception("MongoDB connection error for database %s", db_name)
        raise
    logger.info("Connected to MongoDB: %s", db_name)
