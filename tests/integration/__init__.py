"""
Integration Tests Package for the Parking Registry

Integration tests drive whole command sessions through the dispatcher
and the console loop:
1. End-to-end command scenarios
2. Error recovery across commands
3. Sentinel and end-of-input handling
4. CLI entry point
"""

import sys
from pathlib import Path

# Add the src directory to the Python path for imports
src_dir = Path(__file__).parent.parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))
