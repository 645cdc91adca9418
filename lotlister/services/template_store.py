from __future__ import annotations

import logging
from pathlib import Path

from .errors import UnreadableTemplateError

"""Template file loading.

A missing template is not fatal: DEFAULT_TEMPLATE is written to the expected
location and used for the run. A template that exists but cannot be read or
decoded aborts the run.
"""

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = """FOR SALE: {Description}

Model: {ModelNo}
Lot #: {LotNo}

Contact: {ContactPhone}
"""


def load_template(path: Path) -> str:
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_TEMPLATE, encoding="utf-8")
        logger.warning("template not found, wrote default template to %s", path)
        return DEFAULT_TEMPLATE
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise UnreadableTemplateError(f"cannot read template {path}: {e}") from e
