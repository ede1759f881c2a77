"""Main Z.ai client."""

from __future__ import annotations

import os
import sys
from types import TracebackType
from typing import Any, ClassVar

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

import httpx

from zai_sdk._constants import ZAI_BASE_URL, ZHIPU_BASE_URL
from zai_sdk._http import HTTPClient
from zai_sdk.agents import AgentsResource
from zai_sdk.assistant import AssistantResource
from zai_sdk.audio import AudioResource
from zai_sdk.auth import TokenCache
from zai_sdk.batches import BatchesResource
from zai_sdk.chat import ChatResource
from zai_sdk.config import ENV_BASE_URL, ClientConfig
from zai_sdk.embeddings import EmbeddingsResource
from zai_sdk.file_parser import FileParserResource
from zai_sdk.files import FilesResource
from zai_sdk.images import ImagesResource
from zai_sdk.moderations import ModerationsResource
from zai_sdk.observability import AttemptSink
from zai_sdk.ocr import OCRResource
from zai_sdk.tools import ToolsResource
from zai_sdk.videos import VideosResource
from zai_sdk.voice import VoiceResource
from zai_sdk.web_reader import WebReaderResource
from zai_sdk.web_search import WebSearchResource


class ZaiClient:
    """Main client for the Z.ai platform (overseas endpoint).

    Example usage:
        # Credential from ZAI_API_KEY
        client = ZaiClient()

        # Or explicit
        client = ZaiClient(api_key="your-id.your-secret")

        request = ChatCompletionRequest(model="glm-4.6").with_user_message("Hi")
        print(client.chat.create(request).content)

        # Context manager for cleanup
        with ZaiClient() as client:
            vector = client.embeddings.create_single("embedding-3", "Hello")
    """

    default_base_url: ClassVar[str] = ZAI_BASE_URL

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        disable_token_cache: bool | None = None,
        source_channel: str | None = None,
        accept_language: str | None = None,
        config: ClientConfig | None = None,
        attempt_sink: AttemptSink | None = None,
        http_client: httpx.Client | None = None,
        token_cache: TokenCache | None = None,
    ) -> None:
        """Initialize the client.

        Settings not passed explicitly come from ``ZAI_*`` environment
        variables, then from the built-in defaults. A ``config`` replaces
        both; keyword settings given alongside it are applied on top.

        Args:
            api_key: Credential in ``<id>.<secret>`` form (or ZAI_API_KEY)
            base_url: API root (or ZAI_BASE_URL)
            timeout: Total deadline per call in seconds, retries included
            max_retries: Retries after the first attempt
            disable_token_cache: Mint a new bearer token for every request
            source_channel: Value of the ``x-source-channel`` header
            accept_language: Default ``Accept-Language`` header
            config: Fully built configuration
            attempt_sink: Receives one record per HTTP attempt
            http_client: Pre-configured httpx client to send requests with
            token_cache: Token cache to use instead of the process-wide one

        Raises:
            ConfigurationError: If the credential is missing or any setting
                is invalid
        """
        overrides: dict[str, Any] = {
            "api_key": api_key,
            "base_url": base_url,
            "timeout": timeout,
            "max_retries": max_retries,
            "disable_token_cache": disable_token_cache,
            "source_channel": source_channel,
            "accept_language": accept_language,
        }
        overrides = {k: v for k, v in overrides.items() if v is not None}

        if config is not None:
            self._config = config.clone(**overrides)
        else:
            if "base_url" not in overrides and not os.environ.get(ENV_BASE_URL):
                overrides["base_url"] = self.default_base_url
            self._config = ClientConfig.from_env(**overrides)

        self._http = HTTPClient(
            self._config,
            http_client=http_client,
            token_cache=token_cache,
            attempt_sink=attempt_sink,
        )

        self._chat = ChatResource(self._http)
        self._embeddings = EmbeddingsResource(self._http)
        self._images = ImagesResource(self._http)
        self._videos = VideosResource(self._http)
        self._audio = AudioResource(self._http)
        self._moderations = ModerationsResource(self._http)
        self._ocr = OCRResource(self._http)
        self._file_parser = FileParserResource(self._http)
        self._web_search = WebSearchResource(self._http)
        self._web_reader = WebReaderResource(self._http)
        self._tools = ToolsResource(self._http)
        self._assistant = AssistantResource(self._http)
        self._batches = BatchesResource(self._http)
        self._files = FilesResource(self._http)
        self._agents = AgentsResource(self._http)
        self._voice = VoiceResource(self._http)

    @property
    def config(self) -> ClientConfig:
        """The resolved, immutable configuration."""
        return self._config

    @property
    def chat(self) -> ChatResource:
        """Chat completions (single response and streaming)."""
        return self._chat

    @property
    def embeddings(self) -> EmbeddingsResource:
        return self._embeddings

    @property
    def images(self) -> ImagesResource:
        return self._images

    @property
    def videos(self) -> VideosResource:
        """Asynchronous video generation."""
        return self._videos

    @property
    def audio(self) -> AudioResource:
        return self._audio

    @property
    def moderations(self) -> ModerationsResource:
        return self._moderations

    @property
    def ocr(self) -> OCRResource:
        return self._ocr

    @property
    def file_parser(self) -> FileParserResource:
        """Document parsing (async tasks and sync parsing)."""
        return self._file_parser

    @property
    def web_search(self) -> WebSearchResource:
        return self._web_search

    @property
    def web_reader(self) -> WebReaderResource:
        return self._web_reader

    @property
    def tools(self) -> ToolsResource:
        """Web search tool and tokenizer."""
        return self._tools

    @property
    def assistant(self) -> AssistantResource:
        return self._assistant

    @property
    def batches(self) -> BatchesResource:
        return self._batches

    @property
    def files(self) -> FilesResource:
        return self._files

    @property
    def agents(self) -> AgentsResource:
        return self._agents

    @property
    def voice(self) -> VoiceResource:
        return self._voice

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    def __enter__(self) -> Self:
        """Enter context manager."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and cleanup."""
        self.close()

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"{type(self).__name__}(base_url={self._config.base_url!r}, "
            f"key_id={self._config.api_key_id!r})"
        )


class ZhipuAiClient(ZaiClient):
    """Client for the Zhipu AI platform (mainland China endpoint).

    Identical to :class:`ZaiClient` apart from the default base URL.
    """

    default_base_url: ClassVar[str] = ZHIPU_BASE_URL
