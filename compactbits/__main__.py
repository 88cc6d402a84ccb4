import sys

from compactbits.cli import run

sys.exit(run())
