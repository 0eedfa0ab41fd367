import json
import sys
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional

from configuration import Configuration as Config
from loggers.main_logger import main_logger as logger
from models.manifest import ManifestRecord

# Escaped inside strings so the report can be embedded in HTML safely
HTML_ESCAPES = (
    ("&", "\\u0026"),
    ("<", "\\u003c"),
    (">", "\\u003e"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
)


def escape_html(text: str) -> str:
    # keys and punctuation are plain ASCII, so these characters only occur inside string values
    for raw, escaped in HTML_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def sort_records(records: Iterable[ManifestRecord]) -> List[ManifestRecord]:
    # sorted() is stable: records sharing a name keep their gather order
    return sorted(records, key=lambda r: r.name)


def assemble_report(records: Iterable[ManifestRecord]) -> bytes:
    """
    Serialize records as one JSON array sorted by package name.

    Each object is tab-indented on its own lines; objects are joined by a bare
    comma, e.g.
      [{
      	"name": "a",
      	...
      },{
      	"name": "b",
      	...
      }]
    "&", "<", ">", U+2028 and U+2029 are written as \\u escapes; other
    non-ASCII text is kept as UTF-8. An empty input gives "[]".
    """
    parts = [
        escape_html(json.dumps(r.to_json_dict(), indent=Config.report_indent, ensure_ascii=False))
        for r in sort_records(records)
    ]
    return ("[" + ",".join(parts) + "]").encode("utf-8")


def write_report(report: bytes, output: Optional[str] = None, *, stream: Optional[BinaryIO] = None) -> Optional[Path]:
    """
    Write the report to Config.report_file_name in the working directory when
    output == "file", otherwise to stdout. Returns the file path when one was written.
    """
    if output == "file":
        out_path = Path(Config.report_file_name).resolve()
        out_path.write_bytes(report)
        logger.info(f"Wrote report: {out_path}")
        return out_path

    target = stream if stream is not None else sys.stdout.buffer
    target.write(report)
    target.flush()
    return None
