import sys

from src.silences.cli import main

sys.exit(main())
