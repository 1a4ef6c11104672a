"""dirstat - concurrent directory size and extension statistics"""

from dirstat.__version__ import __version__
from dirstat.orchestrator import ScanOrchestrator, scan_directory


__all__ = ['__version__', 'ScanOrchestrator', 'scan_directory']
