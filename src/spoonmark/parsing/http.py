"""HTTP route parsing for Spoonmark parser.

Route blocks are a single line:

    %% GET /users/{id}/posts

The path is split into literal text and ``{...}`` parameters, in order.
"""

from __future__ import annotations

from spoonmark.errors import MalformedHttpRoute
from spoonmark.nodes import Http, HttpMethod, HttpParam, Text
from spoonmark.parsing.charsets import HTTP_METHODS

HTTP_SIGIL = "%%"


def parse_http_route(line: str) -> Http:
    """Parse a ``%% METHOD path`` line into an Http node.

    Raises:
        MalformedHttpRoute: Sigil, method or path is missing or invalid

    """
    sigil, _, rest = line.strip().partition(" ")
    method, _, path = rest.partition(" ")
    path = path.strip()
    if sigil != HTTP_SIGIL or method not in HTTP_METHODS or not path:
        raise MalformedHttpRoute(f"not a route line: {line!r}")

    parts: list[HttpMethod | Text | HttpParam] = [HttpMethod(method=method)]
    literal_start = 0
    pos = 0
    path_len = len(path)
    while pos < path_len:
        if path[pos] == "{":
            close = _find_param_close(path, pos)
            if close != -1:
                if literal_start < pos:
                    parts.append(Text(content=path[literal_start:pos]))
                parts.append(HttpParam(content=path[pos : close + 1]))
                pos = literal_start = close + 1
                continue
        pos += 1

    if literal_start < path_len:
        parts.append(Text(content=path[literal_start:]))
    return Http(parts=tuple(parts))


def _find_param_close(path: str, pos: int) -> int:
    """Index of the brace balancing the one at ``pos``; -1 if unbalanced or empty."""
    depth = 0
    for index in range(pos, len(path)):
        char = path[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index if index > pos + 1 else -1
    return -1
