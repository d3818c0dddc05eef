#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdlayout/utils/encoding.py
"""Decoding of Markdown sources given as bytes, paths or binary streams."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Union

import chardet

logger = logging.getLogger(__name__)

FALLBACK_ENCODINGS = ["cp1252", "latin-1"]


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Guess the encoding of ``data`` with chardet.

    Returns None when detection fails or its confidence is below
    ``confidence_threshold``.
    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    return encoding if confidence >= confidence_threshold else None


def read_text_with_encoding_detection(data: bytes) -> str:
    """Decode ``data``.

    Valid UTF-8 (with or without BOM) is decoded as such; anything else is
    decoded with the chardet guess, falling back to Latin-1.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("Input is not UTF-8, detecting encoding")

    candidates = FALLBACK_ENCODINGS
    detected = detect_encoding(data)
    if detected:
        candidates = [detected] + FALLBACK_ENCODINGS

    for encoding in candidates:
        try:
            return data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")

    # latin-1 accepts any byte sequence, so this is only reached for odd detections
    return data.decode("utf-8", errors="replace")


def load_text(source: Union[str, Path, IO[bytes], bytes]) -> str:
    """Return the Markdown text held by or referenced from ``source``.

    A ``str`` is Markdown content; use a ``Path`` to read a file.
    """
    if isinstance(source, str):
        return source
    if isinstance(source, bytes):
        return read_text_with_encoding_detection(source)
    if isinstance(source, Path):
        return read_text_with_encoding_detection(source.read_bytes())

    data = source.read()
    if isinstance(data, str):
        return data
    return read_text_with_encoding_detection(data)
