"""
Forgiving CSV reader used by the lead import endpoints.

The tokenizer is a single pass over the text. Quoted sections may hold
commas, newlines and doubled quotes. A quote seen anywhere outside a quoted
section opens one, so stray quotes never raise. Every field is trimmed when
it is pushed, header cells included.

Records are built by zipping the header row against each data row by
position: short rows give partial records, extra values are dropped and
blank rows are skipped.
"""
import csv
import io
from typing import Dict, Iterable, Iterator, List, Tuple


def tokenize_lines(text: str) -> List[Tuple[int, List[str]]]:
    """Like tokenize, paired with the 1-based line each row starts on."""
    rows: List[Tuple[int, List[str]]] = []
    line = 1
    start = 1
    row: List[str] = []
    value = ""
    in_quotes = False
    i = 0
    length = len(text)

    while i < length:
        char = text[i]
        nxt = text[i + 1] if i + 1 < length else ""

        if in_quotes:
            if char == '"' and nxt == '"':
                value += '"'
                i += 1
            elif char == '"':
                in_quotes = False
            else:
                if char == "\n":
                    line += 1
                value += char
        else:
            if char == '"':
                in_quotes = True
            elif char == ",":
                row.append(value.strip())
                value = ""
            elif char == "\r" and nxt == "\n":
                row.append(value.strip())
                rows.append((start, row))
                line += 1
                start = line
                row = []
                value = ""
                i += 1
            elif char == "\n":
                row.append(value.strip())
                rows.append((start, row))
                line += 1
                start = line
                row = []
                value = ""
            else:
                value += char
        i += 1

    # no trailing newline
    if value or row:
        row.append(value.strip())
        rows.append((start, row))

    return rows


def tokenize(text: str) -> List[List[str]]:
    return [row for _, row in tokenize_lines(text)]


def _clean_header(cell: str) -> str:
    cell = cell.strip()
    if cell.startswith('"'):
        cell = cell[1:]
    if cell.endswith('"'):
        cell = cell[:-1]
    return cell


def _is_blank(row: List[str]) -> bool:
    return len(row) == 0 or (len(row) == 1 and row[0] == "")


def iter_records(text: str) -> Iterator[Dict[str, str]]:
    """Yield one dict per non-blank data row, keyed by the header row."""
    rows = tokenize(text or "")
    if not rows:
        return
    headers = [_clean_header(h) for h in rows[0]]
    for row in rows[1:]:
        if _is_blank(row):
            continue
        record: Dict[str, str] = {}
        for index, header in enumerate(headers):
            if index < len(row):
                record[header] = row[index]
        yield record


def parse_csv(text: str) -> List[Dict[str, str]]:
    return list(iter_records(text))


def row_lengths(text: str) -> List[int]:
    """Cell counts of the non-blank data rows, in the order iter_records yields them."""
    rows = tokenize(text or "")
    return [len(row) for row in rows[1:] if not _is_blank(row)]


def row_lines(text: str) -> List[int]:
    """File line each non-blank data row starts on, in the order iter_records yields them."""
    rows = tokenize_lines(text or "")
    return [line for line, row in rows[1:] if not _is_blank(row)]


def header_row(text: str) -> List[str]:
    rows = tokenize(text or "")
    if not rows:
        return []
    return [_clean_header(h) for h in rows[0]]


def dump_csv(records: Iterable[Dict[str, object]]) -> str:
    """Serialize records back to CSV text.

    The header is the first-seen order of keys across all records. Missing
    trailing keys are left off the row so partial records stay partial when
    read back; missing keys in the middle are written as empty cells.
    """
    records = list(records)
    headers: List[str] = []
    seen = set()
    for record in records:
        for key in record.keys():
            if key not in seen:
                seen.add(key)
                headers.append(key)

    if not headers:
        return ""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for record in records:
        last = -1
        for index, header in enumerate(headers):
            if header in record:
                last = index
        values = []
        for header in headers[: last + 1]:
            value = record.get(header)
            values.append("" if value is None else str(value))
        writer.writerow(values)
    return buffer.getvalue()
