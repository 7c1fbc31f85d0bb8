from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path

from career_tailor.core.config import settings

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (value or "").strip().lower())
    return slug.strip("-") or "resume"


def export_filename(role_title: str | None, today: date | None = None) -> str:
    day = (today or date.today()).isoformat()
    return f"tailored-{slugify(role_title or '')}-{day}.txt"


def write_resume(
    text: str,
    role_title: str | None,
    directory: str | Path | None = None,
    *,
    today: date | None = None,
) -> Path:
    out_dir = Path(directory or settings.export_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / export_filename(role_title, today)
    out_path.write_text(text, encoding="utf-8")
    logger.info("resume_exported path=%s chars=%s", out_path, len(text))
    return out_path
