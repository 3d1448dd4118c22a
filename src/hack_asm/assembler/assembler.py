"""
Hack Assembler - Main Interface
===============================

This module provides the Assembler class, the primary interface for
assembling Hack source code. It coordinates the parser and the code
generator and handles reading sources and writing output files.

Example Usage
-------------
>>> from hack_asm.assembler import Assembler
>>>
>>> asm = Assembler()
>>> words = asm.assemble_string('''
... @2
... D=A
... @3
... D=D+A
... @0
... M=D
... ''')
>>> words[0]
'0000000000000010'
>>>
>>> asm.write_hack("Add.hack")

Command-Line Usage
------------------
    $ hackasm Add.asm -o Add.hack -l Add.lst -s Add.sym
"""

from pathlib import Path
from typing import Optional, Sequence, Union
import logging

from hack_asm.assembler.codegen import CodeGenerator
from hack_asm.assembler.symbols import SymbolTable
from hack_asm.config import AssemblerConfig
from hack_asm.errors import AssemblyIOError

logger = logging.getLogger(__name__)

SourceInput = Union[str, Sequence[str]]


def _split_source(source: SourceInput) -> list[str]:
    if isinstance(source, str):
        return source.splitlines()
    return list(source)


class Assembler:
    """
    Main Hack assembler class.

    Each assemble_* call is a fresh run: the symbol table is rebuilt from
    the predefined symbols, so variables allocated by one program never
    leak into the next.

    Attributes:
        config: File-level settings (output naming, encoding, error limit)
    """

    def __init__(self, config: Optional[AssemblerConfig] = None):
        self.config = config or AssemblerConfig()
        self._codegen = CodeGenerator(max_errors=self.config.max_errors)
        self._source_file: Optional[Path] = None

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble(self, source: SourceInput, filename: str = "<input>") -> list[str]:
        """
        Assemble source given as a string or as a sequence of lines.

        Returns:
            One 16-character binary string per instruction

        Raises:
            AssemblyFailedError: If any line is malformed or unresolvable
        """
        return self.assemble_lines(_split_source(source), filename)

    def assemble_string(self, source: str, filename: str = "<input>") -> list[str]:
        return self.assemble_lines(source.splitlines(), filename)

    def assemble_lines(self, lines: Sequence[str], filename: str = "<input>") -> list[str]:
        logger.debug(f"Assembling {filename} ({len(lines)} lines)")
        return self._codegen.generate(lines, filename)

    def assemble_file(self, filepath: Union[str, Path]) -> list[str]:
        """
        Assemble source code from a file.

        Raises:
            AssemblyIOError: If the file cannot be read
            AssemblyFailedError: If assembly fails
        """
        filepath = Path(filepath)
        self._source_file = filepath

        try:
            source = filepath.read_text(encoding=self.config.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise AssemblyIOError(filepath, str(e)) from e

        return self.assemble_lines(source.splitlines(), str(filepath))

    # =========================================================================
    # Results
    # =========================================================================

    def get_code(self) -> list[str]:
        return self._codegen.get_code()

    def get_output_text(self) -> str:
        """The machine code file contents, one newline-terminated word per line."""
        return "".join(f"{word}\n" for word in self._codegen.get_code())

    def get_symbols(self) -> dict[str, int]:
        return self._codegen.get_symbols()

    def get_symbol_table(self) -> SymbolTable:
        return self._codegen.get_symbol_table()

    def get_listing(self) -> str:
        return self._codegen.get_listing()

    def has_errors(self) -> bool:
        return self._codegen.has_errors()

    def get_error_report(self) -> str:
        return self._codegen.get_error_report()

    def get_output_path(self, input_path: Optional[Union[str, Path]] = None) -> Path:
        """
        Default machine code path for an input file.

        Falls back to the last file passed to assemble_file().
        """
        source = Path(input_path) if input_path is not None else self._source_file
        if source is None:
            raise ValueError("no input file to derive an output path from")
        return self.config.output_path_for(source)

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _write_text(self, filepath: Path, text: str) -> Path:
        output_dir = self.config.output_dir
        if output_dir is not None and filepath.parent == Path(output_dir):
            self.config.ensure_output_dir()
        try:
            filepath.write_text(text, encoding=self.config.encoding)
        except OSError as e:
            raise AssemblyIOError(filepath, str(e)) from e
        logger.debug(f"Wrote {filepath}")
        return filepath

    def write_hack(self, filepath: Optional[Union[str, Path]] = None) -> Path:
        """
        Write the machine code file.

        Args:
            filepath: Output path; defaults to get_output_path()

        Returns:
            The path written
        """
        path = Path(filepath) if filepath is not None else self.get_output_path()
        return self._write_text(path, self.get_output_text())

    def write_listing(self, filepath: Optional[Union[str, Path]] = None) -> Path:
        """
        Write assembly listing file.

        The listing shows instruction addresses, words, source lines and
        the symbols defined by the program.
        """
        if filepath is None:
            filepath = self.config.listing_path_for(self._require_source())
        return self._write_text(Path(filepath), self._codegen.get_listing())

    def write_symbols(self, filepath: Optional[Union[str, Path]] = None) -> Path:
        """
        Write symbol table file.

        Format: name address (one per line)
        """
        if filepath is None:
            filepath = self.config.symbols_path_for(self._require_source())
        return self._write_text(Path(filepath), self._codegen.get_symbol_listing())

    def _require_source(self) -> Path:
        if self._source_file is None:
            raise ValueError("no input file to derive an output path from")
        return self._source_file


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source_lines: SourceInput, filename: str = "<input>") -> list[str]:
    """
    Assemble a program into 16-character binary words.

    Args:
        source_lines: Source text, or a sequence of source lines
        filename: Virtual filename for error messages

    Returns:
        One binary string per instruction, in source order

    Raises:
        AssemblyFailedError: If assembly fails
    """
    return Assembler().assemble(source_lines, filename)


def assemble_file(filepath: Union[str, Path],
                  config: Optional[AssemblerConfig] = None) -> list[str]:
    """
    Assemble a source file.

    Raises:
        AssemblyIOError: If the file cannot be read
        AssemblyFailedError: If assembly fails
    """
    return Assembler(config).assemble_file(filepath)
