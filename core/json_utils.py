#!/usr/bin/env python3
"""
JSON helpers for model output

Models are told to answer with bare JSON but sometimes wrap it in Markdown
fences or prose. Two parse tiers are offered: strict, and strict-then-recover.
"""

import json
import logging
import re
from typing import Any

from core.errors import ParseError

logger = logging.getLogger(__name__)

CODE_FENCE_PATTERN = re.compile(r'```json|```')
JSON_OBJECT_PATTERN = re.compile(r'\{[\s\S]*\}')


def strip_code_fences(text: str) -> str:
    """
    Remove Markdown code-fence markers and surrounding whitespace

    Examples:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
    """
    return CODE_FENCE_PATTERN.sub('', text).strip()


def parse_json_strict(text: str) -> Any:
    """
    Parse model output as JSON after stripping code fences

    Raises:
        ParseError: If the text is not valid JSON
    """
    clean = strip_code_fences(text)
    try:
        return json.loads(clean)
    except json.JSONDecodeError as e:
        logger.error(f"❌ [json] Model response was not JSON: {clean[:200]}")
        raise ParseError(f"Model response was not valid JSON: {e}") from e


def parse_json_with_recovery(text: str, error_message: str) -> Any:
    """
    Parse model output as JSON, falling back to the widest {...} substring

    Args:
        text: Raw model output
        error_message: Message for the ParseError raised when both tiers fail

    Raises:
        ParseError: If neither the whole text nor an embedded object parses
    """
    clean = strip_code_fences(text)
    try:
        return json.loads(clean)
    except json.JSONDecodeError:
        pass

    match = JSON_OBJECT_PATTERN.search(clean)
    if match:
        try:
            return json.loads(match.group(0))
        except json.JSONDecodeError as e:
            logger.error(f"❌ [json] Embedded object was not JSON: {match.group(0)[:200]}")
            raise ParseError(error_message) from e

    logger.error(f"❌ [json] Model response was not JSON: {clean[:200]}")
    raise ParseError(error_message)
