"""
Test configuration for TalentFlow tests.

The project root is put on sys.path so 'from talentflow...' resolves whether
pytest runs from the repository root or from talentflow/tests/.
"""
import sys
from pathlib import Path

_project_root = Path(__file__).parent.parent.parent   # .../repo/

if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))
