import logging
from pathlib import Path

p = Path(__file__).resolve()

# Child of the main logger: records propagate to whatever sinks the CLI attached
scan_logger = logging.getLogger("manifest_report.scan")
