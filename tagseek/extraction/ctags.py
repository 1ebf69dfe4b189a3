"""Universal Ctags invocation and ingestion of its JSON output.

Besides the regular language parsers, every enabled language gets a regex
kind that turns developer note comments (``// DEV: ...``, ``# DEV: ...``)
into tags, so the finder agent can search for notes left in the code.
"""

import re
import subprocess
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from tagseek.core.config.extraction_config import ExtractionConfig
from tagseek.core.exceptions import ExtractionError
from tagseek.core.models import SymbolCatalog

# ctags regex (POSIX extended) matching a note comment; {marker} is replaced
# with the escaped marker and the first group becomes the tag name
_SLASH = r"\/\/\s*{marker}\s*([^\n]*)"
_HASH = r"#\s*{marker}\s*([^\n]*)"
_DASH = r"--\s*{marker}\s*([^\n]*)"

NOTE_PATTERNS: dict[str, str] = {
    "C": _SLASH,
    "C++": _SLASH,
    "C#": _SLASH,
    "Java": _SLASH,
    "JavaScript": _SLASH,
    "Python": _HASH,
    "Ruby": _HASH,
    "Go": _SLASH,
    "Rust": _SLASH,
    "Kotlin": _SLASH,
    "TypeScript": _SLASH,
    "Elixir": _HASH,
    "Erlang": r"%\s*{marker}\s*([^\n]*)",
    "Haskell": _DASH,
    "Lua": _DASH,
    "Perl": _HASH,
    "PHP": _SLASH,
    "PowerShell": _HASH,
    "SQL": _DASH,
    "Sh": _HASH,
    "Tcl": _HASH,
    "Asm": r";\s*{marker}\s*([^\n]*)",
    "D": _SLASH,
    "Fortran": r"!\s*{marker}\s*([^\n]*)",
    "Cobol": r"\*\s*{marker}\s*([^\n]*)",
    "HTML": r"<!--\s*{marker}\s*(.*?)\s*-->",
    "CSS": r"\*\s*{marker}\s*(.*?)\s*\*\/",
    "JavaProperties": _HASH,
}


def _escape_marker(marker: str) -> str:
    # ctags uses / as the regex delimiter
    return re.escape(marker).replace("/", r"\/")


class CtagsExtractor:
    """Runs ctags over a repository and builds a symbol catalog."""

    def __init__(self, config: ExtractionConfig | None = None):
        self._config = config or ExtractionConfig()

    def note_arguments(self) -> list[str]:
        """``--kinddef``/``--regex`` pairs defining the note kind per language."""
        config = self._config
        marker = _escape_marker(config.note_marker)
        letter = config.note_kind_letter
        kind = config.note_kind

        args = []
        for language in config.languages:
            pattern = NOTE_PATTERNS.get(language)
            if pattern is None:
                continue
            regex = pattern.format(marker=marker)
            args.append(f"--kinddef-{language}={letter},{kind},{kind}-comments")
            args.append(f"--regex-{language}=/{regex}/\\1/{letter}/")
        return args

    def build_command(
        self, repo_root: Path, exclude: Iterable[str | Path] = ()
    ) -> list[str]:
        """Full ctags command line for ``repo_root``."""
        config = self._config
        command = [
            config.ctags_path,
            f"--languages={','.join(config.languages)}",
            *self.note_arguments(),
            "--fields=+n",
            "-R",
            "--output-format=json",
            "-f",
            "-",
        ]
        for pattern in [*config.exclude, *exclude]:
            command.append(f"--exclude={pattern}")
        command.append(str(repo_root))
        return command

    def extract(
        self, repo_root: Path, exclude: Iterable[str | Path] = ()
    ) -> SymbolCatalog:
        """Run ctags and ingest its output.

        Blocking; async callers should use ``asyncio.to_thread``.

        Raises:
            ExtractionError: ctags is missing, fails, times out, or emits
                undecodable output
            MalformedRecordError: An output line is not a valid record
            MissingFieldError: A tag line has no kind
        """
        command = self.build_command(repo_root, exclude)
        logger.debug(f"Running ctags: {' '.join(command)}")

        try:
            proc = subprocess.run(
                command,
                capture_output=True,
                timeout=self._config.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise ExtractionError(
                f"ctags executable not found: {self._config.ctags_path}. "
                "Install Universal Ctags or set extraction.ctags_path."
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ExtractionError(
                f"ctags timed out after {self._config.timeout}s"
            ) from e

        stderr = proc.stderr.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            raise ExtractionError(
                f"ctags exited with status {proc.returncode}: {stderr.strip()}",
                returncode=proc.returncode,
                stderr=stderr,
            )

        try:
            output = proc.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"ctags output is not valid UTF-8: {e}") from e

        logger.trace("ctags done executing")
        catalog = SymbolCatalog.ingest(output.splitlines())
        logger.info(f"Generated {len(catalog)} tags from {repo_root}")
        return catalog
