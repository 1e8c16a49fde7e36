"""Utilities to build multimodal chat completion messages."""

from typing import Any, Dict, List


def build_user_content(user_prompt: str, image_url: str) -> List[Dict[str, Any]]:
    """Compose the user message parts: the instruction text, then the image."""
    return [
        {"type": "text", "text": user_prompt},
        {"type": "image_url", "image_url": {"url": image_url}},
    ]


def build_messages(system_prompt: str, user_prompt: str, *, image_url: str) -> List[Dict[str, Any]]:
    """Build the chat completion message list for one image."""
    return [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": build_user_content(user_prompt, image_url)},
    ]
