import sys

from shsniff.cli import main

sys.exit(main())
