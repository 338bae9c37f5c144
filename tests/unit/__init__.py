"""
Unit Tests Package for the Parking Registry

Unit tests exercise one layer at a time:
- Domain models and admission rules
- The ParkingRegistry aggregate
- Request DTO parsing
- ParkingService result contract
- Configuration loading
"""

import sys
from pathlib import Path

# Add the src directory to the Python path for imports
src_dir = Path(__file__).parent.parent.parent / "src"
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))
