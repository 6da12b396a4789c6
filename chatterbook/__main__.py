import sys

from chatterbook.cli.app import main

sys.exit(main())
