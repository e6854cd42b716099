"""Response size limiting with line-boundary-safe truncation.

Output larger than the byte budget is cut at the last newline that fits and
annotated with a notice recording the limit, the original size and the
final size. Only when the first line alone is over budget is a line cut in
the middle.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

TRUNCATION_MARKER = "[RESPONSE TRUNCATED"
_SEPARATOR = b"\n\n"


def format_size(num_bytes: int) -> str:
    """Render a byte count as ``256B``, ``1.0KB`` or ``2.0MB``."""
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes / (1024 * 1024):.1f}MB"
    if num_bytes >= 1024:
        return f"{num_bytes / 1024:.1f}KB"
    return f"{num_bytes}B"


def apply_limit(text: str, max_bytes: int, original_size: int | None = None) -> str:
    """Bound *text* to roughly *max_bytes* UTF-8 bytes.

    Args:
        text: Captured process output.
        max_bytes: Byte budget for the retained content.
        original_size: Size of the full output when *text* is only a captured
            prefix of it. Defaults to the encoded size of *text*.

    Returns:
        The text unchanged when it fits (the limit is inclusive), otherwise
        the retained head followed by a blank line and a truncation notice.
    """
    data = text.encode("utf-8")
    if original_size is None:
        original_size = len(data)
    if original_size <= max_bytes:
        return text

    head = _take_lines(data, max_bytes)
    result = _annotate(head, max_bytes, original_size)

    # Near the limit the notice can outweigh what was cut; keep the output smaller.
    result_size = len(result.encode("utf-8"))
    if result_size >= original_size:
        trailer_size = result_size - len(head)
        head = _take_lines(data, max(original_size - trailer_size - 1, 0))
        result = _annotate(head, max_bytes, original_size)

    logger.warning(
        "Response truncated: %d bytes exceeded %s limit, kept %d bytes",
        original_size,
        format_size(max_bytes),
        len(head),
    )
    return result


def _take_lines(data: bytes, budget: int) -> bytes:
    """Return the longest run of complete lines within *budget* bytes."""
    end = 0
    while True:
        newline = data.find(b"\n", end)
        if newline == -1 or newline + 1 > budget:
            break
        end = newline + 1

    if end == 0:
        # First line alone is over budget; drop a multi-byte character split by the cut.
        return data[:budget].decode("utf-8", errors="ignore").encode("utf-8")
    return data[:end]


def _notice(limit: int, original_size: int, truncated_size: int) -> str:
    return (
        f"{TRUNCATION_MARKER}: output exceeded {format_size(limit)} limit. "
        f"Original: {original_size} bytes, Truncated: {truncated_size} bytes]"
    )


def _annotate(head: bytes, limit: int, original_size: int) -> str:
    """Append the separator and notice; the reported size includes the notice."""
    base = len(head) + len(_SEPARATOR)
    size = base
    while True:
        notice = _notice(limit, original_size, size).encode("utf-8")
        if base + len(notice) == size:
            break
        size = base + len(notice)

    return head.decode("utf-8") + _SEPARATOR.decode() + notice.decode("utf-8")
