import sys

from goterra_cli.cli import main

sys.exit(main())
