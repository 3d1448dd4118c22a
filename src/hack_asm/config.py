"""
Hack Assembler - Configuration
==============================

Settings for where and how output artifacts are written. Configuration
can come from:
- Default values (defined here)
- Environment variables
- Explicit keyword arguments (e.g. from the command line)

The translation core does not read any of these; they only shape the
file-level collaborators (Assembler.assemble_file, write_* and the CLI).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os


@dataclass
class AssemblerConfig:
    """
    Configuration for file-level assembly.

    Attributes:
        output_suffix: Extension of the machine code file (default: ".hack")
        listing_suffix: Extension of listing files (default: ".lst")
        symbols_suffix: Extension of symbol files (default: ".sym")
        output_dir: Directory for output files; None writes beside the input
        create_output_dir: Create output_dir when it does not exist
        encoding: Text encoding of source and output files
        max_errors: Stop collecting errors after this many
    """

    output_suffix: str = ".hack"
    listing_suffix: str = ".lst"
    symbols_suffix: str = ".sym"
    output_dir: Optional[Path] = None
    create_output_dir: bool = True
    encoding: str = "utf-8"
    max_errors: int = 100

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            HACKASM_OUTPUT_DIR: Directory for output files
            HACKASM_ENCODING: Source/output text encoding
            HACKASM_MAX_ERRORS: Error limit (integer)

        Returns:
            AssemblerConfig with values from environment variables
        """
        config = cls()

        if output_dir := os.environ.get("HACKASM_OUTPUT_DIR"):
            config.output_dir = Path(output_dir)

        if encoding := os.environ.get("HACKASM_ENCODING"):
            config.encoding = encoding

        if max_errors := os.environ.get("HACKASM_MAX_ERRORS"):
            try:
                config.max_errors = int(max_errors)
            except ValueError:
                pass  # Ignore invalid values

        return config

    # =========================================================================
    # Output Paths
    # =========================================================================

    def _path_with_suffix(self, input_path: Path, suffix: str) -> Path:
        input_path = Path(input_path)
        directory = self.output_dir if self.output_dir is not None else input_path.parent
        return Path(directory) / (input_path.stem + suffix)

    def output_path_for(self, input_path: Path) -> Path:
        """Map Prog.asm to <output_dir>/Prog.hack."""
        return self._path_with_suffix(input_path, self.output_suffix)

    def listing_path_for(self, input_path: Path) -> Path:
        return self._path_with_suffix(input_path, self.listing_suffix)

    def symbols_path_for(self, input_path: Path) -> Path:
        return self._path_with_suffix(input_path, self.symbols_suffix)

    def ensure_output_dir(self) -> Optional[Path]:
        """
        Create output_dir if configured and allowed.

        Returns:
            The output directory, or None when writing beside the input
        """
        if self.output_dir is None:
            return None
        if self.create_output_dir:
            Path(self.output_dir).mkdir(parents=True, exist_ok=True)
        return Path(self.output_dir)
