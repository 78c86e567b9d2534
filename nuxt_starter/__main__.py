import sys

from nuxt_starter.cli import main

sys.exit(main())
