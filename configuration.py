import os
import utils
from pathlib import Path

p = Path(__file__).resolve()


class Configuration:
    # DIRECTORIES
    root_dir = Path(p.parent)

    # PROJECT SETUP
    utils.load_env_file(Path(root_dir, ".env"))

    # SCAN PROPERTIES
    manifest_file_name = "package.json"
    allow_list_source_parent = ".."

    # COLLECTION PROPERTIES
    max_workers = utils.read_int_env("MANIFEST_REPORT_MAX_WORKERS", 32)
    gather_timeout_seconds = utils.read_float_env("MANIFEST_REPORT_TIMEOUT_SECONDS")

    # REPORT PROPERTIES
    report_file_name = "out.json"
    report_indent = "\t"

    # LOGGING PROPERTIES
    log_level = os.getenv("MANIFEST_REPORT_LOG_LEVEL", "INFO").upper()
    log_file = os.getenv("MANIFEST_REPORT_LOG_FILE") or None
