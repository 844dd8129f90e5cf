import sys

from paytally.cli import main

sys.exit(main())
