#!/usr/bin/env python3
"""Simple Z.ai SDK example - one completion, one embedding, one search.

Set environment variables before running:
    export ZAI_API_KEY="your-key-id.your-key-secret"
    # Optional: use the mainland China endpoint instead
    export ZAI_BASE_URL="https://open.bigmodel.cn/api/paas/v4"
"""

from zai_sdk import ZaiClient
from zai_sdk.types import ChatCompletionRequest, WebSearchRequest

# Configuration - replace with your values
CHAT_MODEL = "glm-4.6"
EMBEDDING_MODEL = "embedding-3"
PROMPT = "Explain the difference between a process and a thread in two sentences."


def main() -> None:
    # Initialize client (uses ZAI_API_KEY env var)
    with ZaiClient() as client:
        # =====================================================================
        # Step 1: Chat completion
        # =====================================================================
        print(f"Asking {CHAT_MODEL}: {PROMPT}\n")

        request = (
            ChatCompletionRequest(model=CHAT_MODEL, temperature=0.3)
            .with_system_message("You are a concise technical assistant.")
            .with_user_message(PROMPT)
        )
        completion = client.chat.create(request)

        print("Response:")
        print("-" * 40)
        print(completion.content)
        print("-" * 40)
        if completion.usage is not None:
            print(f"Tokens used: {completion.usage.total_tokens}")

        # =====================================================================
        # Step 2: Embeddings
        # =====================================================================
        vectors = client.embeddings.create_batch(EMBEDDING_MODEL, ["process", "thread"])
        print(f"\nEmbedded {len(vectors)} texts ({len(vectors[0])} dimensions)")

        # =====================================================================
        # Step 3: Web search
        # =====================================================================
        results = client.web_search.search(WebSearchRequest(search_query="GLM-4.6", count=3))
        print("\nSearch results:")
        for item in results.search_result:
            print(f"  {item.title} - {item.link}")


if __name__ == "__main__":
    main()
