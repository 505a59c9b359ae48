"""Scan orchestrator: enumerate files, dispatch to analyzers, aggregate.

Scan Pipeline
-------------
1. Validate the root. A missing root raises ``InvalidOptionsError`` before
   any other I/O.
2. Enumerate files below the root. Directories are listed recursively,
   subtrees matched by an exclude pattern are pruned, and the remaining
   files are kept when an include pattern matches their root-relative
   POSIX path and no exclude pattern does. The result is sorted, so two
   scans of the same tree visit files in the same order.
3. For each file, poll ``should_cancel``, read the content and hand it to
   the analyzer registered for its extension. Files no analyzer handles
   are skipped silently.
4. Concatenate the per-file issue lists in enumeration order.

Failure Policy
--------------
A file that cannot be read (``OSError``, ``UnicodeDecodeError``) is logged
and not counted as scanned. A file that cannot be parsed is counted as
scanned with no issues; the analyzer logs it. Any other exception raised
while analysing a file is logged with its traceback and the file is counted
as scanned with no issues. None of these stop the scan.

With ``workers > 1`` files are analysed on a thread pool and results are
collected in submission order, so the issue list is identical to the
sequential scan.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from baselinelint.analyzers.registry import AnalyzerRegistry, default_registry
from baselinelint.core.compat.database import CompatDatabase, default_database
from baselinelint.core.issues.models import Issue, ScanResult
from baselinelint.exceptions import InvalidOptionsError
from baselinelint.scanner.globs import matches_any, prunes_directory
from baselinelint.scanner.options import ScanOptions

logger = logging.getLogger(__name__)


class Scanner:
    """Runs analyzers over files and aggregates their issues.

    Args:
        database: Compatibility table to use. When None, the table named by
            ``ScanOptions.features_path`` is loaded, falling back to the
            bundled table.
        registry: Analyzers to dispatch to. Defaults to the built-in CSS,
            script and markup analyzers.
    """

    def __init__(
        self,
        database: CompatDatabase | None = None,
        registry: AnalyzerRegistry | None = None,
    ) -> None:
        self.database = database
        self.registry = registry if registry is not None else default_registry()

    # -- Public API --

    def scan(self, root: Path | str, options: ScanOptions | None = None) -> ScanResult:
        """Scan a directory tree (or a single file).

        A single file is analysed whenever an analyzer handles its
        extension; include and exclude patterns apply to directory scans.

        Raises:
            InvalidOptionsError: If ``root`` does not exist.
        """
        options = options or ScanOptions()
        root = Path(root)
        if root.is_file():
            files = [root]
        elif root.is_dir():
            files = self.iter_files(root, options)
        else:
            raise InvalidOptionsError(f"Scan root does not exist: {root}")
        return self.scan_files(files, options)

    def scan_files(
        self, paths: Iterable[Path | str], options: ScanOptions | None = None,
    ) -> ScanResult:
        """Analyse an explicit list of files in the given order."""
        options = options or ScanOptions()
        database = self._database_for(options)
        files = [Path(path) for path in paths]
        if options.workers > 1 and len(files) > 1:
            outcomes = self._run_pool(files, database, options)
        else:
            outcomes = self._run_sequential(files, database, options)

        result = ScanResult()
        for issues in outcomes:
            if issues is None:
                continue
            result.files_scanned += 1
            result.issues.extend(issues)
        logger.info(
            "Scanned %d file(s), found %d issue(s)", result.files_scanned, len(result.issues),
        )
        return result

    def analyze_file(
        self, path: Path | str, content: str, options: ScanOptions | None = None,
    ) -> list[Issue]:
        """Analyse in-memory content as if it were read from ``path``.

        Returns an empty list when no analyzer handles the extension.
        """
        options = options or ScanOptions()
        analyzer = self.registry.for_path(path)
        if analyzer is None:
            return []
        return analyzer.analyze(
            content, str(path), self._database_for(options), options.baseline_level,
        )

    def iter_files(self, root: Path, options: ScanOptions) -> list[Path]:
        """Return the files below ``root`` selected by the options, sorted."""
        selected: list[tuple[str, Path]] = []
        stack = [root]
        while stack:
            directory = stack.pop()
            try:
                entries = list(directory.iterdir())
            except OSError:
                logger.warning("Cannot list directory: %s", directory, exc_info=True)
                continue
            for entry in entries:
                relative = entry.relative_to(root).as_posix()
                if entry.is_dir():
                    # Symlinked directories are not followed; the tree stays acyclic.
                    if entry.is_symlink() or prunes_directory(options.exclude_patterns, relative):
                        continue
                    stack.append(entry)
                elif (
                    entry.is_file()
                    and matches_any(options.include_patterns, relative)
                    and not matches_any(options.exclude_patterns, relative)
                ):
                    selected.append((relative, entry))
        selected.sort(key=lambda item: item[0])
        return [path for _, path in selected]

    # -- Internals --

    def _database_for(self, options: ScanOptions) -> CompatDatabase:
        if self.database is not None:
            return self.database
        if options.features_path is not None:
            return CompatDatabase.from_yaml(options.features_path)
        return default_database()

    def _run_sequential(
        self, files: list[Path], database: CompatDatabase, options: ScanOptions,
    ) -> list[list[Issue] | None]:
        outcomes: list[list[Issue] | None] = []
        for path in files:
            if options.cancelled():
                logger.info("Scan cancelled, %d file(s) skipped", len(files) - len(outcomes))
                break
            outcomes.append(self._scan_one(path, database, options))
        return outcomes

    def _run_pool(
        self, files: list[Path], database: CompatDatabase, options: ScanOptions,
    ) -> list[list[Issue] | None]:
        outcomes: list[list[Issue] | None] = []
        with ThreadPoolExecutor(max_workers=options.workers) as pool:
            futures: list[Future[list[Issue] | None]] = [
                pool.submit(self._scan_one_unless_cancelled, path, database, options)
                for path in files
            ]
            for index, future in enumerate(futures):
                if options.cancelled():
                    for pending in futures[index:]:
                        pending.cancel()
                    logger.info("Scan cancelled, %d file(s) skipped", len(files) - index)
                    break
                outcomes.append(future.result())
        return outcomes

    def _scan_one_unless_cancelled(
        self, path: Path, database: CompatDatabase, options: ScanOptions,
    ) -> list[Issue] | None:
        if options.cancelled():
            return None
        return self._scan_one(path, database, options)

    def _scan_one(
        self, path: Path, database: CompatDatabase, options: ScanOptions,
    ) -> list[Issue] | None:
        """Analyse one file. Returns None when the file was not scanned."""
        analyzer = self.registry.for_path(path)
        if analyzer is None:
            return None
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            logger.warning("Failed to read: %s", path, exc_info=True)
            return None
        if options.verbose:
            logger.debug("Analyzing %s with %r", path, analyzer)
        try:
            return analyzer.analyze(content, str(path), database, options.baseline_level)
        except Exception:
            logger.warning("Failed to analyze: %s", path, exc_info=True)
            return []


def scan(root: Path | str, options: ScanOptions | None = None) -> ScanResult:
    """Scan ``root`` with the built-in analyzers.

    Uses the bundled compatibility table unless ``options.features_path``
    names another one.
    """
    return Scanner().scan(root, options)


def analyze_file(
    path: Path | str, content: str, options: ScanOptions | None = None,
) -> list[Issue]:
    """Analyse one file's content with the built-in analyzers."""
    return Scanner().analyze_file(path, content, options)
