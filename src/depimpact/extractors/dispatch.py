"""Pick a symbol extractor by file extension."""

from __future__ import annotations

from pathlib import Path

from depimpact.extractors.base import SymbolExtractor
from depimpact.extractors.python_exports import PythonExportExtractor
from depimpact.extractors.ts_exports import TypeScriptExportExtractor, is_supported


class ExportExtractor(SymbolExtractor):
    """Routes each file to the Python or JS/TS extractor.

    Files of any other type export nothing.
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)
        self.python = PythonExportExtractor(self.root)
        self.typescript = TypeScriptExportExtractor(self.root)

    def extract_exports(self, file_path: str) -> list[str]:
        suffix = Path(file_path).suffix.lower()
        if suffix in (".py", ".pyi"):
            return self.python.extract_exports(file_path)
        if is_supported(file_path):
            return self.typescript.extract_exports(file_path)
        return []
