"""Shared constants for the Z.ai SDK."""

from __future__ import annotations

VERSION = "0.1.0"

SDK_NAME = "zai-sdk-python"
USER_AGENT = f"{SDK_NAME}/{VERSION}"

# Platform endpoints
ZAI_BASE_URL = "https://api.z.ai/api/paas/v4"
ZHIPU_BASE_URL = "https://open.bigmodel.cn/api/paas/v4"

# Client defaults
DEFAULT_TIMEOUT = 120.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_SOURCE_CHANNEL = "python-sdk"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en"
CHINESE_ACCEPT_LANGUAGE = "zh-CN,zh"

# Header names
HEADER_SOURCE_CHANNEL = "x-source-channel"
HEADER_REQUEST_ID = "X-Request-Id"
RESPONSE_REQUEST_ID_HEADERS = ("X-Request-ID", "Request-ID")

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_EVENT_STREAM = "text/event-stream"
CONTENT_TYPE_OCTET_STREAM = "application/octet-stream"

# Bearer token lifetime (seconds)
TOKEN_TTL = 210.0
TOKEN_SAFETY_MARGIN = 30.0
TOKEN_CACHE_MAX_SIZE = 10

# Retry backoff
RETRY_INITIAL_DELAY = 0.5
RETRY_MULTIPLIER = 2.0
RETRY_MAX_DELAY = 8.0
RETRY_JITTER = 0.25

# Characters of an unstructured error body kept on the exception
ERROR_BODY_EXCERPT = 500

STREAM_DONE = "[DONE]"
