import sys

from remotetheme.cli import main

sys.exit(main())
