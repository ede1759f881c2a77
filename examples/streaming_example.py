#!/usr/bin/env python3
"""Streaming demo: chat deltas, reasoning output, and cancellation.

Usage:
    export ZAI_API_KEY="your-key-id.your-key-secret"

    python streaming_example.py --prompt "Write a haiku about rivers"

    # Zhipu AI endpoint, stop after 50 chunks
    python streaming_example.py --zhipu --max-chunks 50 \
        --prompt "List every prime below 1000"
"""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn

from zai_sdk import (
    AuthenticationError,
    CallOptions,
    CancellationError,
    CancellationToken,
    ConfigurationError,
    RateLimitError,
    StreamingError,
    ZaiClient,
    ZaiError,
    ZhipuAiClient,
)
from zai_sdk.types import ChatCompletionRequest


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Z.ai SDK streaming demo")
    parser.add_argument("--prompt", required=True, help="User prompt")
    parser.add_argument("--model", default="glm-4.6", help="Chat model (default: glm-4.6)")
    parser.add_argument(
        "--zhipu",
        action="store_true",
        help="Use the Zhipu AI endpoint instead of Z.ai",
    )
    parser.add_argument(
        "--max-chunks",
        type=int,
        default=0,
        help="Cancel the stream after this many chunks (0 = no limit)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Deadline in seconds for connecting and receiving the response headers",
    )
    return parser.parse_args()


def fail(message: str) -> NoReturn:
    """Print error and exit."""
    print(f"\nError: {message}", file=sys.stderr)
    sys.exit(1)


def main() -> None:
    args = parse_args()
    client_cls = ZhipuAiClient if args.zhipu else ZaiClient

    try:
        client = client_cls(timeout=args.timeout)
    except ConfigurationError as e:
        fail(str(e))

    token = CancellationToken()
    request = ChatCompletionRequest(model=args.model).with_user_message(args.prompt)

    print(f"Streaming from {client!r}\n")
    with client:
        try:
            with client.chat.create_stream(
                request, options=CallOptions(cancellation=token)
            ) as stream:
                while stream.advance():
                    chunk = stream.current
                    if chunk.reasoning_content:
                        print(chunk.reasoning_content, end="", flush=True, file=sys.stderr)
                    print(chunk.content, end="", flush=True)
                    if args.max_chunks and stream.events_delivered >= args.max_chunks:
                        token.cancel()

                print()
                if isinstance(stream.error, CancellationError):
                    print(f"\n[cancelled after {stream.events_delivered} chunks]")
                elif isinstance(stream.error, StreamingError):
                    fail(
                        f"stream interrupted after {stream.error.events_delivered} chunks: "
                        f"{stream.error.message}"
                    )
                elif stream.error is not None:
                    raise stream.error
        except AuthenticationError as e:
            fail(f"authentication failed ({e.code}): {e.message}")
        except RateLimitError as e:
            fail(f"rate limited, retry after {e.retry_after}s")
        except ZaiError as e:
            fail(f"{e.kind.value}: {e.message}")


if __name__ == "__main__":
    main()
