#!/usr/bin/env python3
import base64
import io
from pathlib import Path
from typing import Dict, List, Union

from PIL import Image


def load_screenshot(path: Union[str, Path]) -> Image.Image:
    """Open a page screenshot, fully decoded so the file handle is released."""
    with Image.open(path) as img:
        img.load()
        return img.copy()


def image_to_data_url(img: Image.Image) -> str:
    # PNG keeps glyph edges intact; JPEG artifacts hurt transcription.
    buffered = io.BytesIO()
    img.save(buffered, format="PNG")
    img_b64 = base64.b64encode(buffered.getvalue()).decode('utf-8')
    return f"data:image/png;base64,{img_b64}"


def add_images_to_messages(messages: List[Dict], images: List[Image.Image]) -> List[Dict]:
    user_msg_idx = None
    for i in range(len(messages) - 1, -1, -1):
        if messages[i]['role'] == 'user':
            user_msg_idx = i
            break

    if user_msg_idx is None:
        raise ValueError("No user message found to attach images to")

    original_content = messages[user_msg_idx]['content']

    if isinstance(original_content, list):
        content = original_content.copy()
    elif original_content:
        content = [{"type": "text", "text": original_content}]
    else:
        content = []

    for img in images:
        content.append({
            "type": "image_url",
            "image_url": {
                "url": image_to_data_url(img)
            }
        })

    messages = messages.copy()
    messages[user_msg_idx] = messages[user_msg_idx].copy()
    messages[user_msg_idx]['content'] = content

    return messages
