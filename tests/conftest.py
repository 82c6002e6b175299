import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import marp_editor` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(autouse=True)
def _quiet_editor_logs(caplog):
    """Keep marp_editor debug chatter out of failing-test output."""
    caplog.set_level("INFO", logger="marp_editor")
    yield
