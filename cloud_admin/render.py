"""
Console renderers for scanned items.

Three interchangeable encodings:
- verbose: one pretty-printed block per item, streamed as items arrive
- CSV: every cell quoted, quotes doubled, newlines written as the two
  characters ``\\n`` (kept on one physical line, unlike RFC 4180)
- TSV: unquoted, tabs and newlines written as ``\\t`` and ``\\n``

CSV and TSV need the full header set before the first line, so they take a
fully buffered item list.
"""

from pprint import pformat
from typing import Any, Dict, Iterable, List, Sequence, TextIO

Item = Dict[str, Any]

NO_ITEMS = "(no items)"


def format_attribute_value(value: Any) -> str:
    """Deterministic text form of a typed attribute value.

    ``{'S': 'x'}`` becomes ``S('x')``, ``{'N': '1'}`` becomes ``N('1')``,
    maps and sets are ordered so equal values always print the same.
    """
    if not isinstance(value, dict) or len(value) != 1:
        return repr(value)

    (type_tag, inner), = value.items()
    if type_tag == 'NULL':
        return 'NULL'
    if type_tag == 'BOOL':
        return f"BOOL({bool(inner)})"
    if type_tag in ('S', 'N', 'B'):
        return f"{type_tag}({inner!r})"
    if type_tag in ('SS', 'NS', 'BS'):
        return f"{type_tag}({sorted(inner)!r})"
    if type_tag == 'L':
        return "L([" + ", ".join(format_attribute_value(v) for v in inner) + "])"
    if type_tag == 'M':
        entries = ", ".join(
            f"{name!r}: {format_attribute_value(inner[name])}" for name in sorted(inner)
        )
        return "M({" + entries + "})"
    return repr(value)


def escape_csv(text: str) -> str:
    """Quote one CSV cell."""
    return '"' + text.replace('"', '""').replace('\n', '\\n') + '"'


def escape_tsv(text: str) -> str:
    """Escape one TSV cell."""
    return text.replace('\t', '\\t').replace('\n', '\\n')


def collect_headers(items: Iterable[Item]) -> List[str]:
    """Sorted union of attribute names across all items."""
    names = set()
    for item in items:
        names.update(item.keys())
    return sorted(names)


def cell_values(item: Item, headers: Sequence[str]) -> List[str]:
    """Cell text for each header; missing attributes give an empty cell."""
    return [format_attribute_value(item[h]) if h in item else '' for h in headers]


def write_verbose_item(item: Item, out: TextIO) -> None:
    """Print one item block followed by a blank line."""
    print(pformat(item, sort_dicts=True), file=out)
    print(file=out)


def write_csv(items: Sequence[Item], out: TextIO) -> int:
    """Write buffered items as CSV.

    Returns:
        Number of data rows written
    """
    if not items:
        print(NO_ITEMS, file=out)
        return 0

    headers = collect_headers(items)
    print(",".join(escape_csv(h) for h in headers), file=out)
    for item in items:
        print(",".join(escape_csv(cell) for cell in cell_values(item, headers)), file=out)
    return len(items)


def write_tsv(items: Sequence[Item], out: TextIO) -> int:
    """Write buffered items as TSV.

    Returns:
        Number of data rows written
    """
    if not items:
        print(NO_ITEMS, file=out)
        return 0

    headers = collect_headers(items)
    print("\t".join(headers), file=out)
    for item in items:
        print("\t".join(escape_tsv(cell) for cell in cell_values(item, headers)), file=out)
    return len(items)


RENDERERS = {
    'csv': write_csv,
    'tsv': write_tsv,
}
