import sys

from kernel_selector.cli import main

sys.exit(main())
