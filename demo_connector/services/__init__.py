# -*- coding: utf-8 -*-
from .api_client import APIClientError, DemoAPI
from .meta import Meta, CHANNEL_META_URL_KEY, ALLOWED_CHANNEL_META
from .transform import TransformError
from .sync_results import SyncResults
from .sync_logger import SyncLogger
from .sync_service import SyncService
