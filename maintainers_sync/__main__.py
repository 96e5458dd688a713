import sys

from maintainers_sync.cli import main

sys.exit(main())
