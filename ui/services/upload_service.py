"""Upload business logic service."""
from __future__ import annotations
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from streamlit.runtime.uploaded_file_manager import UploadedFile

from core.config import AppConfig, config as default_config
from core.logger import get_logger
from core.utils import human_size, sha256_bytes
from models.schema import StatementFile

log = get_logger("ui/services/upload_service")


class UploadService:
    """Handles file upload validation and capture."""

    @staticmethod
    def validate_files(
        files: Optional[Sequence[UploadedFile]],
        cfg: AppConfig = default_config,
    ) -> Tuple[bool, Optional[str]]:
        """
        Validate uploaded files.

        Returns:
            (is_valid, error_message)
        """
        if not files:
            return False, "Please upload at least one file."

        if len(files) > cfg.max_files:
            return False, f"Too many files. Max allowed: {cfg.max_files}."

        for f in files:
            ext = Path(f.name).suffix.lower().lstrip(".")
            if ext not in cfg.allowed_ext:
                log.warning(f"Rejected file (ext): {f.name}")
                return False, f"Unsupported file type: {f.name}. Allowed: {', '.join(cfg.allowed_ext)}."

        total_size = sum(f.size for f in files)
        if total_size > cfg.max_total_mb * 1024 * 1024:
            return False, f"Total upload size exceeds {cfg.max_total_mb} MB."

        return True, None

    @staticmethod
    def to_statement_files(files: Sequence[UploadedFile]) -> Tuple[StatementFile, ...]:
        """Capture the exact uploaded bytes, in upload order."""
        captured = tuple(
            StatementFile(name=Path(f.name).name, content=f.getvalue())
            for f in files
        )
        log.info(f"Captured {len(captured)} upload(s): {[m['name'] for m in UploadService.describe(captured)]}")
        return captured

    @staticmethod
    def statement_years(entries: Mapping[str, Optional[float]]) -> Dict[str, int]:
        """Per-file year overrides keyed like ``StatementFile.name``; blank entries are skipped."""
        return {
            Path(name).name: int(year)
            for name, year in entries.items()
            if year is not None
        }

    @staticmethod
    def describe(files: Sequence[StatementFile]) -> List[Dict]:
        """Display metadata for each captured file."""
        return [
            {
                "name": f.name,
                "ext": Path(f.name).suffix.lower().lstrip("."),
                "size_bytes": f.size,
                "size_human": human_size(f.size),
                "sha256": sha256_bytes(f.content),
            }
            for f in files
        ]
