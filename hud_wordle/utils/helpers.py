"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Any, Dict, Optional


def sanitize_user_id(user_id: Any) -> str:
    """
    Normalize an opaque user identifier into a session store key.

    The display host hands out email-like ids; dots are replaced so the same
    key is produced on every lookup and store.
    """
    if user_id is None:
        raise ValueError("User ID is required")
    key = str(user_id).strip()
    if not key:
        raise ValueError("User ID is required")
    return key.replace('.', '_')


def parse_transcription(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Extract text and finality from a transcription payload.

    Accepts both ``is_final`` and the host's ``isFinal`` spelling; a payload
    without a flag is treated as final.
    """
    if not data:
        raise ValueError("Transcription payload is required")

    text = data.get('text')
    if not isinstance(text, str):
        raise ValueError("Transcription text must be a string")

    is_final = data.get('is_final', data.get('isFinal', True))
    return {'text': text, 'is_final': bool(is_final)}
