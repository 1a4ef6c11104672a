"""Pydantic models for scan observations and results"""

from pydantic import BaseModel, ConfigDict, Field

from dirstat.utils import human_readable_size


NO_EXTENSION = '(no ext)'

GIB = 1024 * 1024 * 1024


class FileObservation(BaseModel):
    """A classified regular file

    Attributes:
        path: Absolute path of the file
        size: File size in bytes
        extension: Normalized extension token ('.txt', '(no ext)')
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., examples=['/data/logs/app.log'], description='Absolute file path')
    size: int = Field(..., ge=0, examples=[1024], description='File size in bytes')
    extension: str = Field(..., examples=['.log'], description='Lowercased final suffix or "(no ext)"')


class ExtensionStat(BaseModel):
    """Totals for one extension, as shown in reports"""

    extension: str = Field(..., examples=['.log'])
    total_bytes: int = Field(..., examples=[2048])
    count: int = Field(..., examples=[2])
    percent: float = Field(..., examples=[66.7], description='Share of all scanned bytes')


class ScanSnapshot(BaseModel):
    """Final aggregate of one scan run

    Attributes:
        root: Scanned root directory
        file_count: Number of regular files observed
        total_bytes: Sum of all observed file sizes
        extension_bytes: Extension -> total bytes
        extension_counts: Extension -> number of files
        observations: (size, path) pairs in the order workers merged them
        skipped_entries: Entries dropped because they could not be stat-ed
        traversal_error: Message of the error that stopped the walk early, if any
        workers: Worker pool size used for the run
        elapsed_seconds: Wall time of the run
    """

    root: str = Field(..., examples=['/data'])
    file_count: int = Field(0, examples=[3])
    total_bytes: int = Field(0, examples=[160])
    extension_bytes: dict[str, int] = Field(default_factory=dict, examples=[{'.txt': 150, NO_EXTENSION: 10}])
    extension_counts: dict[str, int] = Field(default_factory=dict, examples=[{'.txt': 2, NO_EXTENSION: 1}])
    observations: list[tuple[int, str]] = Field(default_factory=list, examples=[[[100, '/data/a.txt']]])
    skipped_entries: int = Field(0, examples=[0])
    traversal_error: str | None = Field(None, description='Set when the walk ended early')
    workers: int = Field(0, examples=[8])
    elapsed_seconds: float = Field(0.0, examples=[0.42])

    @property
    def degraded(self) -> bool:
        """True when the walk stopped early or some entries were skipped."""
        return self.traversal_error is not None or self.skipped_entries > 0

    def top_extensions(self, k: int) -> list[ExtensionStat]:
        """Extensions sorted by total size descending (ties by name)."""
        ordered = sorted(self.extension_bytes.items(), key=lambda kv: (-kv[1], kv[0]))
        result = []
        for ext, total in ordered[: max(k, 0)]:
            percent = (total / self.total_bytes * 100.0) if self.total_bytes else 0.0
            result.append(
                ExtensionStat(
                    extension=ext,
                    total_bytes=total,
                    count=self.extension_counts.get(ext, 0),
                    percent=percent,
                )
            )
        return result

    def top_files(self, k: int) -> list[tuple[int, str]]:
        """Largest files, size descending (ties by path)."""
        return sorted(self.observations, key=lambda obs: (-obs[0], obs[1]))[: max(k, 0)]

    def to_cli(self, colorize: bool = False, top: int = 15) -> str:
        """Format snapshot as a human-readable report"""
        GREEN = '\033[32m'
        YELLOW = '\033[33m'
        RED = '\033[31m'
        CYAN = '\033[36m'
        GREY = '\033[90m'
        RESET = '\033[0m'

        def paint(text: str, color: str) -> str:
            return f'{color}{text}{RESET}' if colorize else text

        lines = [paint('Scan finished.', GREEN)]
        lines.append(f'Path: {self.root}')
        lines.append(f'Workers: {self.workers}')
        lines.append(f'Time: {self.elapsed_seconds:.3f}s')
        lines.append(f'Total files: {self.file_count}')
        lines.append(f'Total size: {self.total_bytes / GIB:.2f} GB ({human_readable_size(self.total_bytes)})')
        if self.skipped_entries:
            lines.append(paint(f'Skipped entries: {self.skipped_entries}', GREY))
        if self.traversal_error:
            lines.append(paint(f'Traversal stopped early: {self.traversal_error}', RED))

        if self.file_count == 0:
            lines.append('')
            lines.append('No files found.')
            return '\n'.join(lines)

        lines.append('')
        lines.append(paint(f'Top {top} file extensions by TOTAL SIZE:', YELLOW))
        for stat in self.top_extensions(top):
            gb = stat.total_bytes / GIB
            lines.append(
                f'{paint(f"{stat.extension:>8}", CYAN)} : {gb:8.2f} GB  ({stat.percent:.1f}%, {stat.count} files)'
            )

        lines.append('')
        lines.append(paint(f'Top {top} largest files:', YELLOW))
        for i, (size, path) in enumerate(self.top_files(top), start=1):
            lines.append(f'  {i:2d}. {human_readable_size(size):>12}  {path}')

        return '\n'.join(lines)
