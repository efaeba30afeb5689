from typing import Any, Dict


def message_response(text: str) -> Dict[str, Any]:
    """Shape of a Responses API result with the web-search tool enabled."""
    return {
        "output": [
            {"type": "web_search_call", "id": "ws_1", "status": "completed"},
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            },
        ]
    }
