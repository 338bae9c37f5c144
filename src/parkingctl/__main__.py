import sys

from .presentation.console import main

sys.exit(main())
