"""Request and response models for the Z.ai API."""

from zai_sdk.types._base import RequestModel, ResponseModel
from zai_sdk.types.agents import (
    AgentAsyncResultRequest,
    AgentCompletion,
    AgentCompletionChunk,
    AgentInvokeRequest,
)
from zai_sdk.types.assistant import (
    AssistantAttachment,
    AssistantCompletion,
    AssistantSupportResponse,
    ConversationMessage,
    ConversationRequest,
    ConversationUsageResponse,
    DeltaBlock,
    ErrorInfo,
    ExtraParameters,
    MessageTextContent,
    TextContentBlock,
    ToolsDeltaBlock,
    TranslateParameters,
)
from zai_sdk.types.audio import (
    TranscriptionFormat,
    TranscriptionRequest,
    TranscriptionResponse,
)
from zai_sdk.types.batch import Batch, BatchCreateRequest, BatchList
from zai_sdk.types.chat import (
    ChatCompletion,
    ChatCompletionChunk,
    ChatCompletionRequest,
    Choice,
    ContentPart,
    Delta,
    FunctionCall,
    FunctionDefinition,
    ImageURL,
    ImageURLContentPart,
    Message,
    ResponseFormat,
    TextContentPart,
    ThinkingConfig,
    Tool,
    ToolCall,
)
from zai_sdk.types.embeddings import Embedding, EmbeddingRequest, EmbeddingResponse
from zai_sdk.types.file_parser import (
    FileParserContent,
    FileParserCreateRequest,
    FileParserCreateResponse,
    FileParserSyncResponse,
)
from zai_sdk.types.files import (
    FileContent,
    FileDeleted,
    FileList,
    FileObject,
    FileUploadRequest,
)
from zai_sdk.types.images import ImageGenerationRequest, ImageGenerationResponse
from zai_sdk.types.moderation import ModerationRequest, ModerationResponse, ModerationResult
from zai_sdk.types.ocr import OCRRequest, OCRResponse
from zai_sdk.types.shared import Usage
from zai_sdk.types.tools import (
    SearchIntent,
    SearchIntentToolCall,
    SearchRecommend,
    SearchRecommendToolCall,
    SearchResult,
    SearchResultToolCall,
    SearchToolCall,
    TokenizerRequest,
    TokenizerResponse,
    WebSearchToolChunk,
    WebSearchToolRequest,
    WebSearchToolResponse,
)
from zai_sdk.types.videos import (
    TaskStatus,
    VideoGenerationRequest,
    VideoGenerationResponse,
    VideoResult,
)
from zai_sdk.types.voice import (
    VoiceCloneRequest,
    VoiceCloneResponse,
    VoiceDeleteRequest,
    VoiceDeleteResponse,
    VoiceListRequest,
    VoiceListResponse,
)
from zai_sdk.types.web_reader import WebReaderRequest, WebReaderResponse
from zai_sdk.types.web_search import WebSearchRequest, WebSearchResponse

__all__ = [
    # Base
    "RequestModel",
    "ResponseModel",
    "Usage",
    # Chat
    "ChatCompletion",
    "ChatCompletionChunk",
    "ChatCompletionRequest",
    "Choice",
    "ContentPart",
    "Delta",
    "FunctionCall",
    "FunctionDefinition",
    "ImageURL",
    "ImageURLContentPart",
    "Message",
    "ResponseFormat",
    "TextContentPart",
    "ThinkingConfig",
    "Tool",
    "ToolCall",
    # Assistant
    "AssistantAttachment",
    "AssistantCompletion",
    "AssistantSupportResponse",
    "ConversationMessage",
    "ConversationRequest",
    "ConversationUsageResponse",
    "DeltaBlock",
    "ErrorInfo",
    "ExtraParameters",
    "MessageTextContent",
    "TextContentBlock",
    "ToolsDeltaBlock",
    "TranslateParameters",
    # Tools
    "SearchIntent",
    "SearchIntentToolCall",
    "SearchRecommend",
    "SearchRecommendToolCall",
    "SearchResult",
    "SearchResultToolCall",
    "SearchToolCall",
    "TokenizerRequest",
    "TokenizerResponse",
    "WebSearchToolChunk",
    "WebSearchToolRequest",
    "WebSearchToolResponse",
    # Search and reader
    "WebSearchRequest",
    "WebSearchResponse",
    "WebReaderRequest",
    "WebReaderResponse",
    # Media
    "EmbeddingRequest",
    "EmbeddingResponse",
    "Embedding",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "TaskStatus",
    "VideoGenerationRequest",
    "VideoGenerationResponse",
    "VideoResult",
    "TranscriptionFormat",
    "TranscriptionRequest",
    "TranscriptionResponse",
    "ModerationRequest",
    "ModerationResponse",
    "ModerationResult",
    "OCRRequest",
    "OCRResponse",
    # Files and documents
    "FileContent",
    "FileDeleted",
    "FileList",
    "FileObject",
    "FileUploadRequest",
    "FileParserContent",
    "FileParserCreateRequest",
    "FileParserCreateResponse",
    "FileParserSyncResponse",
    # Batches
    "Batch",
    "BatchCreateRequest",
    "BatchList",
    # Agents
    "AgentAsyncResultRequest",
    "AgentCompletion",
    "AgentCompletionChunk",
    "AgentInvokeRequest",
    # Voice
    "VoiceCloneRequest",
    "VoiceCloneResponse",
    "VoiceDeleteRequest",
    "VoiceDeleteResponse",
    "VoiceListRequest",
    "VoiceListResponse",
]
