"""
Topology writer - renders the exported document as indented JSON and writes
the same text to every configured output file.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Sequence

from .errors import ErrorKind, ExplorerError
from .models import ExplorerDocument

DEFAULT_OUTPUT_FILES = ("serviceBusExplorer.json", "emulator.json")


class TopologyWriter:
    """
    Writes an ExplorerDocument to disk.

    Existing files are overwritten in place.
    """

    def __init__(
            self,
            output_dir: Optional[Path] = None,
            file_names: Sequence[str] = DEFAULT_OUTPUT_FILES,
            indent: int = 2
    ):
        """
        Initialize writer

        Args:
            output_dir: Directory the files are written to (defaults to the working directory).
            file_names: Names of the output files; each receives identical content.
            indent: JSON indentation width.
        """
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.file_names = tuple(file_names)
        self.indent = indent

        if not self.file_names:
            raise ValueError("At least one output file name is required")

    def output_paths(self) -> List[Path]:
        base = self.output_dir if self.output_dir is not None else Path.cwd()
        return [base / name for name in self.file_names]

    def render(self, document: ExplorerDocument) -> str:
        return json.dumps(document.to_dict(), indent=self.indent)

    def write(self, document: ExplorerDocument) -> List[Path]:
        """
        Render the document once and write it to every output path.

        Returns:
            The paths written.

        Raises:
            ExplorerError: With kind WRITE if a file cannot be written.
        """
        content = self.render(document)
        written = []
        for output_path in self.output_paths():
            try:
                with open(output_path, 'w', encoding='utf-8') as f:
                    f.write(content)
            except OSError as e:
                raise ExplorerError(ErrorKind.WRITE, f"Failed to write {output_path}: {e}", cause=e) from e
            print(f"[WRITE] ✅ Topology written to: {output_path}")
            written.append(output_path)
        return written
