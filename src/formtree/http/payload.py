"""HTTP payload decoding — flat form fields to nested values and back.

Browsers submit flat field names. Nested forms and arrays are encoded
with the bracket notation::

    user[name]=John&user[tags][]=a&user[tags][]=b

``nest()`` turns such pairs into the nested payload accepted by
``Form.submit()``, and ``flatten()`` does the opposite with the value
returned by ``Form.http_value()``.

URL-encoded bodies are decoded with the stdlib ``urllib.parse``.
``multipart/form-data`` needs ``python-multipart``
(``pip install formtree[multipart]``).
"""

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from formtree.errors import ConfigurationError

logger = logging.getLogger("formtree.http")

_SEGMENT_RE = re.compile(r"\[([^\[\]]*)\]")


@dataclass(frozen=True, slots=True)
class UploadedFile:
    """A file part of a multipart body, held in memory."""

    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    def __repr__(self) -> str:
        return f"UploadedFile({self.filename!r}, {self.content_type!r}, {self.size} bytes)"


def split_name(name: str) -> list[str]:
    """Split a field name on its brackets.

    ``"a[b][]"`` gives ``["a", "b", ""]``. A malformed name is kept whole.
    """
    head, bracket, rest = name.partition("[")
    if not bracket or not head:
        return [name]

    rest = "[" + rest
    segments = _SEGMENT_RE.findall(rest)

    if "".join(f"[{s}]" for s in segments) != rest:
        logger.debug("Malformed field name %r kept as is", name)
        return [name]

    return [head, *segments]


def _next_index(target: Mapping[Any, Any]) -> int:
    """The first integer key after every integer key of *target*."""
    indexes = [key for key in target if type(key) is int]
    return max(indexes) + 1 if indexes else 0


def nest(pairs: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Build a nested payload from flat ``(name, value)`` pairs.

    Numeric segments become ``int`` keys, so arrays are dicts keyed by
    index. An empty segment (``tags[]``) appends after the highest index
    of the array. A later
    value for the same name replaces the former one.

    Example::

        nest([("a[b]", "1"), ("a[c][]", "x"), ("a[c][]", "y")])
        # {"a": {"b": "1", "c": {0: "x", 1: "y"}}}
    """
    result: dict[Any, Any] = {}

    for name, value in pairs:
        segments = split_name(name)
        target = result

        for index, segment in enumerate(segments):
            key: Any = segment
            if index > 0:
                if segment == "":
                    key = _next_index(target)
                elif segment.isdigit():
                    key = int(segment)

            if index == len(segments) - 1:
                target[key] = value
                break

            child = target.get(key)
            if not isinstance(child, dict):
                child = target[key] = {}
            target = child

    return result


def flatten(value: Any, name: str = "") -> dict[str, str]:
    """Flatten a nested HTTP value into bracket notation field names.

    ``None`` entries are omitted. Scalars are converted to ``str``.
    """
    flat: dict[str, str] = {}

    if isinstance(value, Mapping):
        items: Iterable[tuple[Any, Any]] = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        if value is not None and name:
            flat[name] = value if isinstance(value, str) else str(value)
        return flat

    for key, item in items:
        flat.update(flatten(item, f"{name}[{key}]" if name else str(key)))

    return flat


def from_multi_value(data: Mapping[str, Any]) -> dict[str, Any]:
    """Nest any mapping of form fields.

    Multi-value mappings (exposing ``get_list()``, like a web framework
    ``FormData`` or ``QueryParams``) keep every value of a repeated
    field: a plain name submitted several times becomes an array.
    """
    get_list = getattr(data, "get_list", None)
    pairs: list[tuple[str, Any]] = []

    for name in data:
        values = get_list(name) if get_list is not None else data[name]

        if not isinstance(values, (list, tuple)):
            pairs.append((name, values))
        elif len(values) == 1 and get_list is not None:
            pairs.append((name, values[0]))
        else:
            array_name = name if name.endswith("[]") else f"{name}[]"
            pairs.extend((array_name, value) for value in values)

    return nest(pairs)


def parse_body(body: bytes, content_type: str, encoding: str = "utf-8") -> dict[str, Any]:
    """Decode a form request body into a nested payload.

    Supports:
    - ``application/x-www-form-urlencoded`` (stdlib)
    - ``multipart/form-data`` (requires ``python-multipart``); file parts
      are returned as ``UploadedFile``

    Raises:
        ConfigurationError: If multipart parsing is needed but
            ``python-multipart`` is not installed.
        ValueError: If the content type is not a form encoding.
    """
    ct_lower = content_type.lower().split(";")[0].strip()

    if ct_lower == "application/x-www-form-urlencoded":
        from urllib.parse import parse_qsl

        return nest(parse_qsl(body.decode(encoding), keep_blank_values=True))

    if ct_lower == "multipart/form-data":
        return nest(_parse_multipart(body, content_type, encoding))

    msg = f"Unsupported form content type: {content_type!r}"
    raise ValueError(msg)


def _parse_multipart(body: bytes, content_type: str, encoding: str) -> list[tuple[str, Any]]:
    try:
        from multipart.multipart import MultipartParser, parse_options_header
    except ImportError:
        msg = (
            "Multipart form parsing requires the 'python-multipart' package. "
            "Install it with: pip install formtree[multipart]"
        )
        raise ConfigurationError(msg) from None

    _, options = parse_options_header(content_type.encode("latin-1"))
    boundary = options.get(b"boundary")
    if boundary is None:
        msg = "Multipart form data missing boundary parameter"
        raise ValueError(msg)

    pairs: list[tuple[str, Any]] = []
    headers: dict[str, str] = {}
    header_field = ""
    content = bytearray()

    def on_part_begin() -> None:
        nonlocal content
        headers.clear()
        content = bytearray()

    def on_part_data(chunk: bytes, start: int, end: int) -> None:
        content.extend(chunk[start:end])

    def on_header_field(chunk: bytes, start: int, end: int) -> None:
        nonlocal header_field
        header_field = chunk[start:end].decode("latin-1").lower()

    def on_header_value(chunk: bytes, start: int, end: int) -> None:
        headers[header_field] = chunk[start:end].decode("latin-1")

    def on_part_end() -> None:
        _, params = parse_options_header(
            headers.get("content-disposition", "").encode("latin-1")
        )
        name = params.get(b"name")
        if name is None:
            return

        filename = params.get(b"filename")
        if filename is None:
            pairs.append((name.decode(encoding), content.decode(encoding, errors="replace")))
            return

        pairs.append((
            name.decode(encoding),
            UploadedFile(
                filename=filename.decode(encoding),
                content_type=headers.get("content-type", "application/octet-stream"),
                content=bytes(content),
            ),
        ))

    parser = MultipartParser(
        boundary,
        {
            "on_part_begin": on_part_begin,
            "on_part_data": on_part_data,
            "on_part_end": on_part_end,
            "on_header_field": on_header_field,
            "on_header_value": on_header_value,
        },
    )
    parser.write(body)
    parser.finalize()

    return pairs
